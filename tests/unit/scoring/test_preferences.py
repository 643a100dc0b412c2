"""
Tests for preference resolution: sign rule, PCI, PCC and midpoint adjustment.
"""

import pytest

from scoring_service.core.data_models import ClarityCategory, Dichotomy
from scoring_service.irt.estimation.abilities import ThetaEstimate
from scoring_service.irt.estimation.enums import ConvergenceStatus
from scoring_service.scoring.preferences import (
    DICHOTOMY_CONFIG,
    apply_midpoint_adjustment,
    categorize_pci,
    compute_pci,
    resolve_dichotomy,
    resolve_estimate,
    resolve_preference,
)


class TestPreferenceSign:
    @pytest.mark.parametrize(
        ("dichotomy", "positive", "negative"),
        [
            (Dichotomy.EI, "E", "I"),
            (Dichotomy.SN, "S", "N"),
            (Dichotomy.TF, "T", "F"),
            (Dichotomy.JP, "J", "P"),
        ],
    )
    def test_sign_rule(
        self, dichotomy: Dichotomy, positive: str, negative: str
    ) -> None:
        config = DICHOTOMY_CONFIG[dichotomy]
        assert resolve_preference(1.2, config) == positive
        assert resolve_preference(-1.2, config) == negative

    @pytest.mark.parametrize(
        ("dichotomy", "tie_breaker"),
        [
            (Dichotomy.EI, "I"),
            (Dichotomy.SN, "N"),
            (Dichotomy.TF, "F"),
            (Dichotomy.JP, "P"),
        ],
    )
    def test_tie_breaker_is_negative_pole(
        self, dichotomy: Dichotomy, tie_breaker: str
    ) -> None:
        config = DICHOTOMY_CONFIG[dichotomy]
        assert config.tie_breaker == tie_breaker
        assert config.tie_breaker == config.negative_pole
        assert resolve_preference(0.0, config) == tie_breaker


class TestClarityIndex:
    @pytest.mark.parametrize(
        ("theta", "expected"),
        [
            (0.0, 1),
            (0.01, 1),
            (-0.04, 1),
            (1.0, 10),
            (-1.5, 15),
            (2.9, 29),
            (3.0, 30),
            (-3.0, 30),
        ],
    )
    def test_pci(self, theta: float, expected: int) -> None:
        assert compute_pci(theta) == expected

    @pytest.mark.parametrize(
        ("pci", "expected"),
        [
            (1, ClarityCategory.SLIGHT),
            (5, ClarityCategory.SLIGHT),
            (6, ClarityCategory.MODERATE),
            (15, ClarityCategory.MODERATE),
            (16, ClarityCategory.CLEAR),
            (25, ClarityCategory.CLEAR),
            (26, ClarityCategory.VERY_CLEAR),
            (30, ClarityCategory.VERY_CLEAR),
        ],
    )
    def test_category_boundaries(
        self, pci: int, expected: ClarityCategory
    ) -> None:
        assert categorize_pci(pci) == expected

    @pytest.mark.parametrize(
        ("theta", "pci", "pcc"),
        [
            (0.5, 5, ClarityCategory.SLIGHT),
            (0.6, 6, ClarityCategory.MODERATE),
            (1.5, 15, ClarityCategory.MODERATE),
            (1.6, 16, ClarityCategory.CLEAR),
            (2.5, 25, ClarityCategory.CLEAR),
            (2.6, 26, ClarityCategory.VERY_CLEAR),
        ],
    )
    def test_theta_at_category_boundaries(
        self, theta: float, pci: int, pcc: ClarityCategory
    ) -> None:
        result = resolve_dichotomy(Dichotomy.EI, -theta)
        assert result.pci == pci
        assert result.pcc == pcc


class TestMidpointAdjustment:
    def test_ei_is_never_adjusted(self) -> None:
        result = resolve_dichotomy(Dichotomy.EI, 0.04)
        assert result.pci == 1
        assert result.preference == "E"

    @pytest.mark.parametrize(
        ("dichotomy", "theta", "expected"),
        [
            (Dichotomy.SN, 0.04, "N"),
            (Dichotomy.TF, 0.04, "F"),
            (Dichotomy.TF, 0.2, "F"),
            (Dichotomy.JP, 0.04, "P"),
        ],
    )
    def test_low_clarity_flips(
        self, dichotomy: Dichotomy, theta: float, expected: str
    ) -> None:
        result = resolve_dichotomy(dichotomy, theta)
        assert result.preference == expected

    @pytest.mark.parametrize(
        ("dichotomy", "theta", "expected"),
        [
            (Dichotomy.SN, 0.2, "S"),
            (Dichotomy.TF, 0.3, "T"),
            (Dichotomy.JP, 0.2, "J"),
        ],
    )
    def test_above_threshold_keeps_preference(
        self, dichotomy: Dichotomy, theta: float, expected: str
    ) -> None:
        result = resolve_dichotomy(dichotomy, theta)
        assert result.preference == expected

    @pytest.mark.parametrize(
        ("dichotomy", "expected"),
        [
            (Dichotomy.SN, "N"),
            (Dichotomy.TF, "F"),
            (Dichotomy.JP, "P"),
        ],
    )
    def test_no_reverse_flip(self, dichotomy: Dichotomy, expected: str) -> None:
        """Low-clarity N, F and P are never moved to S, T or J."""
        result = resolve_dichotomy(dichotomy, -0.04)
        assert result.preference == expected
        assert result.pci == 1

    def test_flip_keeps_clarity_values(self) -> None:
        result = resolve_dichotomy(Dichotomy.TF, 0.2)
        assert result.preference == "F"
        assert result.pci == 2
        assert result.pcc == ClarityCategory.SLIGHT

    def test_rules_directly(self) -> None:
        assert apply_midpoint_adjustment(Dichotomy.SN, "S", 1) == "N"
        assert apply_midpoint_adjustment(Dichotomy.SN, "S", 2) == "S"
        assert apply_midpoint_adjustment(Dichotomy.TF, "T", 2) == "F"
        assert apply_midpoint_adjustment(Dichotomy.TF, "T", 3) == "T"
        assert apply_midpoint_adjustment(Dichotomy.JP, "J", 1) == "P"
        assert apply_midpoint_adjustment(Dichotomy.JP, "J", 2) == "J"
        assert apply_midpoint_adjustment(Dichotomy.EI, "E", 1) == "E"
        assert apply_midpoint_adjustment(Dichotomy.SN, "N", 1) == "N"


class TestResolveDichotomy:
    def test_zero_theta(self) -> None:
        for dichotomy in Dichotomy:
            result = resolve_dichotomy(dichotomy, 0.0)
            assert result.theta == 0.0
            assert result.pci == 1
            assert result.pcc == ClarityCategory.SLIGHT
            assert result.preference == DICHOTOMY_CONFIG[dichotomy].tie_breaker

    def test_theta_rounded_for_reporting(self) -> None:
        result = resolve_dichotomy(Dichotomy.EI, 1.23456)
        assert result.theta == 1.23
        assert result.pci == 12

    def test_resolve_estimate_carries_diagnostics(self) -> None:
        estimate = ThetaEstimate(
            theta=2.7,
            n_items=21,
            n_iterations=6,
            convergence_status=ConvergenceStatus.CONVERGED,
            standard_error=0.4,
        )
        result = resolve_estimate(Dichotomy.EI, estimate)
        assert result.n_answered == 21
        assert result.convergence_status == ConvergenceStatus.CONVERGED
        assert result.standard_error == 0.4
        assert result.preference == "E"
        assert result.pcc == ClarityCategory.VERY_CLEAR
