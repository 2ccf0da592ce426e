"""Test conversions between confidence levels and numbers of sigma."""

import math

import pytest

from statypes.exceptions import SigmaRangeError
from statypes.probability import CL90, CL95, CL99, conf_level, get_pvalue
from statypes.sigma import (
    get_n_sigma,
    get_n_sigma1,
    n_sigma,
    n_sigma1,
    n_sigma1_or_none,
    n_sigma_or_none,
)


class TestTwoTailed:
    def test_one_sigma_is_68_percent(self):
        assert math.isclose(conf_level(n_sigma(1.0)), 0.6826894921370859, rel_tol=1e-9)

    def test_three_sigma(self):
        assert math.isclose(get_pvalue(n_sigma(3.0)), 0.0026997960632601866, rel_tol=1e-9)

    def test_1_96_sigma_matches_cl95(self):
        cl = n_sigma(1.959963984540054)
        assert math.isclose(get_pvalue(cl), get_pvalue(CL95), abs_tol=1e-12)
        assert math.isclose(conf_level(cl), 0.95, abs_tol=1e-12)

    @pytest.mark.parametrize("n", [0.1, 0.5, 1.0, 2.0, 3.0, 5.0])
    def test_round_trip(self, n):
        assert math.isclose(get_n_sigma(n_sigma(n)), n, rel_tol=1e-9)

    def test_get_n_sigma_of_constants(self):
        assert math.isclose(get_n_sigma(CL95), 1.959963984540054, rel_tol=1e-9)
        assert math.isclose(get_n_sigma(CL99), 2.5758293035489004, rel_tol=1e-9)
        assert get_n_sigma(CL90) < get_n_sigma(CL95) < get_n_sigma(CL99)

    def test_returns_plain_float(self):
        assert type(n_sigma(2.0).p) is float
        assert type(get_n_sigma(CL95)) is float


class TestOneTailed:
    def test_one_sigma(self):
        assert math.isclose(get_pvalue(n_sigma1(1.0)), 0.15865525393145707, rel_tol=1e-9)

    def test_one_tailed_is_half_of_two_tailed(self):
        for n in (0.5, 1.0, 2.0, 4.0):
            assert math.isclose(
                get_pvalue(n_sigma1(n)), get_pvalue(n_sigma(n)) / 2, rel_tol=1e-12
            )

    @pytest.mark.parametrize("n", [0.1, 1.0, 1.644853626951472, 3.0, 5.0])
    def test_round_trip(self, n):
        assert math.isclose(get_n_sigma1(n_sigma1(n)), n, rel_tol=1e-9)

    def test_1_645_sigma_matches_cl95(self):
        assert math.isclose(get_n_sigma1(CL95), 1.6448536269514722, rel_tol=1e-9)


class TestNonPositiveSigma:
    @pytest.mark.parametrize("n", [0, 0.0, -1, -1.0, math.nan])
    def test_raising_forms(self, n):
        with pytest.raises(SigmaRangeError, match="n_sigma: non-positive number of sigma"):
            n_sigma(n)
        with pytest.raises(SigmaRangeError, match="n_sigma1: non-positive number of sigma"):
            n_sigma1(n)

    @pytest.mark.parametrize("n", [0, -1])
    def test_fallible_forms(self, n):
        assert n_sigma_or_none(n) is None
        assert n_sigma1_or_none(n) is None

    def test_fallible_forms_succeed_for_positive(self):
        assert n_sigma_or_none(2.0) == n_sigma(2.0)
        assert n_sigma1_or_none(2.0) == n_sigma1(2.0)
