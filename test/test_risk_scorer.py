from datetime import datetime
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal

import pytest

from vendor_risk.services.risk_model.assessment import RiskLevel, final_risk_score, risk_level_for
from vendor_risk.services.risk_model.risk_scorer import RiskScorer

FIXED_NOW = datetime(2026, 1, 14, 12, 0, 0)


@pytest.fixture()
def scorer():
    return RiskScorer(clock=lambda: FIXED_NOW)


# ======================
# Riesgo financiero
# ======================

@pytest.mark.parametrize(
    "health, expected",
    [
        (0, "0.80"),
        (45, "0.80"),
        (49, "0.80"),
        (50, "0.60"),
        (55, "0.60"),
        (59, "0.60"),
        (60, "0.40"),
        (69, "0.40"),
        (70, "0.25"),
        (79, "0.25"),
        (80, "0.10"),
        (85, "0.10"),
        (100, "0.10"),
    ],
)
def test_financial_risk_steps(scorer, make_vendor, health, expected):
    assert scorer.financial_risk(make_vendor(financial_health=health)) == Decimal(expected)


def test_financial_risk_is_non_increasing(scorer, make_vendor):
    allowed = {Decimal(v) for v in ("0.80", "0.60", "0.40", "0.25", "0.10")}
    previous = Decimal("1")
    for health in range(0, 101):
        score = scorer.financial_risk(make_vendor(financial_health=health))
        assert score in allowed
        assert score <= previous
        previous = score


# ======================
# Riesgo operacional
# ======================

@pytest.mark.parametrize(
    "uptime, incidents, expected",
    [
        (85, 0, "0.50"),
        (89.99, 0, "0.50"),
        (90, 0, "0.35"),
        (94.99, 0, "0.35"),
        (95, 0, "0.15"),
        (98.99, 0, "0.15"),
        (99, 0, "0.05"),
        (99.5, 0, "0.05"),
        (99.5, 1, "0.15"),
        (99.5, 2, "0.15"),
        (99.5, 3, "0.30"),
        (99.5, 4, "0.45"),
        (88, 3, "0.75"),
        (80, 10, "0.90"),
    ],
)
def test_operational_risk(scorer, make_vendor, uptime, incidents, expected):
    vendor = make_vendor(sla_uptime=uptime, major_incidents=incidents)
    assert scorer.operational_risk(vendor) == Decimal(expected)


def test_operational_risk_never_exceeds_one(scorer, make_vendor):
    vendor = make_vendor(sla_uptime=0, major_incidents=100)
    score = scorer.operational_risk(vendor)
    assert Decimal("0") <= score <= Decimal("1")


# ======================
# Riesgo de seguridad / cumplimiento
# ======================

@pytest.mark.parametrize(
    "certs, expected",
    [
        ([], "0.40"),
        (["ISO27001", "SOC2"], "0.00"),
        (["ISO27001", "PCI-DSS"], "0.00"),
        (["ISO27001"], "0.10"),
        (["SOC2"], "0.20"),
        (["PCI-DSS"], "0.20"),
        (["HIPAA"], "0.30"),
    ],
)
def test_certification_penalty(scorer, make_vendor, certs, expected):
    vendor = make_vendor(security_certs=certs)
    assert scorer.security_compliance_risk(vendor) == Decimal(expected)


@pytest.mark.parametrize(
    "contract, privacy, pentest, expected",
    [
        (True, True, True, "0.00"),
        (False, True, True, "0.15"),
        (True, False, True, "0.25"),
        (True, True, False, "0.30"),
        (False, False, True, "0.40"),
        (False, True, False, "0.45"),
        (True, False, False, "0.55"),
        (False, False, False, "0.75"),
    ],
)
def test_document_penalties_stack_with_add_ons(scorer, make_vendor, contract, privacy, pentest, expected):
    vendor = make_vendor(
        security_certs=["ISO27001", "SOC2"],
        contract_valid=contract,
        privacy_policy_valid=privacy,
        pentest_report_valid=pentest,
    )
    assert scorer.security_compliance_risk(vendor) == Decimal(expected)


def test_security_risk_is_clamped(scorer, make_vendor):
    vendor = make_vendor(
        security_certs=[],
        contract_valid=False,
        privacy_policy_valid=False,
        pentest_report_valid=False,
    )
    # 0.40 + 0.50 + 0.10 + 0.15 = 1.15 -> 1.0
    assert scorer.security_compliance_risk(vendor) == Decimal("1.0")


# ======================
# Score final y nivel
# ======================

def test_final_score_formula():
    assert final_risk_score("0.60", "0.50", "0.40") == Decimal("0.51")
    assert final_risk_score("0.10", "0.05", "0.00") == Decimal("0.06")
    assert final_risk_score(1, 1, 1) == Decimal("1.00")
    assert final_risk_score(0, 0, 0) == Decimal("0.00")


def test_final_score_uses_bankers_rounding_by_default():
    # 0.32 + 0.225 + 0.30 = 0.845
    assert final_risk_score("0.80", "0.75", "1.0") == Decimal("0.84")
    # 0.04 + 0.015 + 0.03 = 0.085
    assert final_risk_score("0.10", "0.05", "0.10") == Decimal("0.08")


def test_final_score_half_up_rounding():
    assert final_risk_score("0.80", "0.75", "1.0", rounding=ROUND_HALF_UP) == Decimal("0.85")
    assert final_risk_score("0.10", "0.05", "0.10", rounding=ROUND_HALF_UP) == Decimal("0.09")


@pytest.mark.parametrize(
    "score, level",
    [
        ("0", RiskLevel.LOW),
        ("0.2499", RiskLevel.LOW),
        ("0.25", RiskLevel.MEDIUM),
        ("0.4999", RiskLevel.MEDIUM),
        ("0.50", RiskLevel.HIGH),
        ("0.7499", RiskLevel.HIGH),
        ("0.75", RiskLevel.CRITICAL),
        ("0.9999", RiskLevel.CRITICAL),
        ("1.0", RiskLevel.CRITICAL),
    ],
)
def test_risk_level_thresholds(score, level):
    assert risk_level_for(Decimal(score)) is level


# ======================
# Evaluacion completa
# ======================

def test_assess_worst_case_vendor(scorer, make_vendor):
    vendor = make_vendor(
        financial_health=45,
        sla_uptime=88,
        major_incidents=3,
        security_certs=[],
        contract_valid=False,
        privacy_policy_valid=False,
        pentest_report_valid=False,
    )

    result = scorer.assess(vendor)

    assert result.financial_risk_score == Decimal("0.80")
    assert result.operational_risk_score == Decimal("0.75")
    assert result.security_compliance_risk_score == Decimal("1.0")
    assert result.final_risk_score == Decimal("0.84")
    assert result.risk_level is RiskLevel.CRITICAL
    assert result.assessed_at == FIXED_NOW
    assert result.assessed_by == "System"
    assert result.vendor_id == 1


def test_assess_worst_case_vendor_half_up(make_vendor):
    scorer = RiskScorer(rounding=ROUND_HALF_UP)
    vendor = make_vendor(
        financial_health=45,
        sla_uptime=88,
        major_incidents=3,
        security_certs=[],
        contract_valid=False,
        privacy_policy_valid=False,
        pentest_report_valid=False,
    )

    result = scorer.assess(vendor)

    assert result.final_risk_score == Decimal("0.85")
    assert result.risk_level is RiskLevel.CRITICAL


def test_assess_healthy_vendor_with_iso_only(scorer, make_vendor):
    vendor = make_vendor(financial_health=90, sla_uptime=99.5, security_certs=["ISO27001"])

    result = scorer.assess(vendor)

    assert result.financial_risk_score == Decimal("0.10")
    assert result.operational_risk_score == Decimal("0.05")
    # Tiene certificaciones pero ni SOC2 ni PCI-DSS
    assert result.security_compliance_risk_score == Decimal("0.10")
    assert result.final_risk_score == Decimal("0.08")
    assert result.risk_level is RiskLevel.LOW
    assert result.explanation == (
        "Vendor meets all compliance and operational standards with minimal risk indicators."
    )


def test_assess_low_risk_vendor(scorer, make_vendor):
    vendor = make_vendor(financial_health=90, sla_uptime=99, security_certs=["ISO27001", "SOC2"])
    assert scorer.assess(vendor).risk_level is RiskLevel.LOW


def test_assess_medium_high_vendor(scorer, make_vendor):
    vendor = make_vendor(financial_health=50, sla_uptime=90, major_incidents=0)

    result = scorer.assess(vendor)

    # (0.60 * 0.4) + (0.35 * 0.3) + (0.10 * 0.3) = 0.375
    assert result.final_risk_score == Decimal("0.38")
    assert result.risk_level is RiskLevel.MEDIUM


def test_assess_scores_stay_in_range(scorer, make_vendor):
    for health in (0, 49, 50, 79, 100):
        for uptime in (0, 89.9, 94.9, 98.9, 100):
            for incidents in (0, 1, 3, 50):
                result = scorer.assess(
                    make_vendor(financial_health=health, sla_uptime=uptime, major_incidents=incidents)
                )
                for score in result.scores():
                    assert Decimal("0") <= score <= Decimal("1")
                assert result.risk_level is risk_level_for(result.final_risk_score)


def test_assess_is_idempotent(make_vendor):
    scorer = RiskScorer()
    vendor = make_vendor(financial_health=55, sla_uptime=91.25, major_incidents=2, privacy_policy_valid=False)

    first = scorer.assess(vendor)
    second = scorer.assess(vendor)

    assert first.scores() == second.scores()
    assert first.risk_level is second.risk_level
    assert first.explanation == second.explanation


def test_result_to_dict(scorer, make_vendor):
    data = scorer.assess(make_vendor()).to_dict()

    assert data["risk_level"] == "Low"
    assert data["assessed_by"] == "System"
    assert set(data) >= {
        "financial_risk_score",
        "operational_risk_score",
        "security_compliance_risk_score",
        "final_risk_score",
        "explanation",
        "assessed_at",
    }


# ======================
# Hooks
# ======================

def test_hooks_receive_events(make_vendor):
    events = []
    scorer = RiskScorer(hooks=[lambda event, fields: events.append((event, fields))])

    result = scorer.assess(make_vendor())

    names = [name for name, _ in events]
    assert names == [
        "financial_risk",
        "operational_risk",
        "security_compliance_risk",
        "assessment_completed",
    ]
    assert events[-1][1]["result"] is result


def test_broken_hook_does_not_change_result(make_vendor):
    def broken(event, fields):
        raise RuntimeError("boom")

    vendor = make_vendor(financial_health=45)
    plain = RiskScorer(rounding=ROUND_HALF_EVEN).assess(vendor)
    hooked = RiskScorer(rounding=ROUND_HALF_EVEN, hooks=[broken]).assess(vendor)

    assert plain.scores() == hooked.scores()
    assert plain.explanation == hooked.explanation
