"""
Unit tests for compatibility layer.
"""

import numpy as np
import pytest

from sigmatau.compat import (
    adev,
    hdev,
    htotdev,
    mdev,
    mtotdev,
    oadev,
    ohdev,
    stdev,
    tdev,
    totdev,
    ttotdev,
)

from conftest import NBS_FREQ, NBS_PHASE


class TestCompatibility:
    """Test compatibility layer functions."""

    def test_allan(self):
        """Test Allan deviations on plain lists."""
        assert adev(NBS_PHASE) == pytest.approx(91.22945, rel=1e-6)
        assert adev(NBS_PHASE, 2) == pytest.approx(85.95287, rel=1e-6)
        assert oadev(NBS_PHASE, 2) == 0.0

    def test_modified(self):
        assert mdev(NBS_PHASE, 2) == pytest.approx(74.78849, rel=1e-6)
        assert tdev(NBS_PHASE) == pytest.approx(52.67135, rel=1e-6)

    def test_hadamard(self):
        assert hdev(NBS_PHASE) == pytest.approx(70.80607, rel=1e-6)
        assert ohdev(NBS_PHASE) == hdev(NBS_PHASE)

    def test_total(self):
        assert totdev(NBS_PHASE, 2) == pytest.approx(93.90379, rel=1e-6)
        assert mtotdev(NBS_PHASE) == pytest.approx(75.50203, rel=1e-5)
        assert ttotdev(NBS_PHASE) == pytest.approx(75.50203 / np.sqrt(3), rel=1e-5)
        assert htotdev(NBS_FREQ) == pytest.approx(np.sqrt(210567 / 84))

    def test_tau0(self):
        assert adev(NBS_PHASE, 1, tau0=2.0) == pytest.approx(adev(NBS_PHASE) / 2.0)

    def test_stdev(self):
        assert stdev(NBS_FREQ) == pytest.approx(np.std(NBS_FREQ, ddof=1))
        assert stdev(NBS_FREQ, 9) == 0.0

    def test_validation(self):
        with pytest.raises(ValueError, match="m must be a positive integer"):
            adev(NBS_PHASE, 0)
