from __future__ import annotations

import random

import numpy as np
import pandas as pd
import pytest
from hypothesis import settings

# ---- Deterministic Testing Configuration ---------------------

# Global deterministic seed
DETERMINISTIC_SEED = 42


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "hypothesis: property-based tests")


@pytest.fixture(autouse=True)
def set_deterministic_seed():
    """Set deterministic seed for all tests"""
    random.seed(DETERMINISTIC_SEED)
    np.random.seed(DETERMINISTIC_SEED)
    yield
    # Reset after test
    random.seed()
    np.random.seed()


@pytest.fixture
def partition_settings() -> dict:
    """Settings dict with defaults for partition building."""
    return {
        "partition": {"dropna": False, "row_id_column": None},
        "logging": {"level": "INFO"},
    }


@pytest.fixture
def cities_df() -> pd.DataFrame:
    """Small table with repeated values on city and country."""
    return pd.DataFrame(
        {
            "row_id": [1, 2, 3, 4, 5, 6],
            "city": ["Budapest", "Vienna", "Budapest", "Szeged", "Vienna", "Budapest"],
            "country": ["HU", "AT", "HU", "HU", "AT", "HU"],
            "zip": ["1011", "1010", "1011", "6720", "1020", "1052"],
        },
    )


# Hypothesis settings for all property-based tests
settings.register_profile(
    "deterministic",
    deadline=None,
    max_examples=200,
    database=None,
)
settings.load_profile("deterministic")
