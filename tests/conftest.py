"""
Shared fixtures: the NBS 9-point frequency test record.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from sigmatau.dataset import Dataset

NBS_FREQ = [892, 809, 823, 798, 671, 644, 883, 903, 677]
NBS_PHASE = [0, 892, 1701, 2524, 3322, 3993, 4637, 5520, 6423, 7100]


@pytest.fixture
def nbs_freq():
    return np.array(NBS_FREQ, dtype=float)


@pytest.fixture
def nbs_phase():
    return np.array(NBS_PHASE, dtype=float)


@pytest.fixture
def nbs_dataset():
    dataset = Dataset(name="nbs", dataset_id=1)
    dataset.load_freq(NBS_FREQ)
    return dataset
