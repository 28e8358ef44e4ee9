"""Shared fixtures for the diagnostics test suite."""
from __future__ import annotations

import numpy as np
import pytest


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(20240611)


@pytest.fixture
def scored_sample(rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray]:
    """A calibrated-ish sample: label ~ Bernoulli(score), scores rounded to force ties."""
    score = np.round(rng.uniform(0.0, 1.0, size=2000), 2)
    label = rng.uniform(0.0, 1.0, size=score.shape[0]) < score
    return label, score
