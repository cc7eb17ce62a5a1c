from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import ROUND_HALF_EVEN, Decimal
from enum import Enum
from typing import Optional

from vendor_risk.services.risk_model.profile import to_decimal

# Pesos de la formula final (suman 1.0)
FINANCIAL_WEIGHT = Decimal("0.4")
OPERATIONAL_WEIGHT = Decimal("0.3")
SECURITY_WEIGHT = Decimal("0.3")

TWO_PLACES = Decimal("0.01")


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


# Umbrales semiabiertos: [0, 0.25) [0.25, 0.50) [0.50, 0.75) [0.75, 1.0]
RISK_LEVEL_THRESHOLDS = [
    (Decimal("0.25"), RiskLevel.LOW),
    (Decimal("0.50"), RiskLevel.MEDIUM),
    (Decimal("0.75"), RiskLevel.HIGH),
]


def final_risk_score(financial, operational, security, rounding: str = ROUND_HALF_EVEN) -> Decimal:
    """
    (F * 0.4) + (O * 0.3) + (S * 0.3), redondeado a 2 decimales.
    Por defecto usa redondeo bancario (ROUND_HALF_EVEN): 0.845 -> 0.84.
    """
    raw = (
        to_decimal(financial) * FINANCIAL_WEIGHT
        + to_decimal(operational) * OPERATIONAL_WEIGHT
        + to_decimal(security) * SECURITY_WEIGHT
    )
    return raw.quantize(TWO_PLACES, rounding=rounding)


def risk_level_for(score) -> RiskLevel:
    score = to_decimal(score)
    for upper, level in RISK_LEVEL_THRESHOLDS:
        if score < upper:
            return level
    return RiskLevel.CRITICAL


@dataclass(frozen=True)
class RiskAssessmentResult:
    """Resultado del scorer. Se persiste tal cual, nunca se modifica."""

    financial_risk_score: Decimal
    operational_risk_score: Decimal
    security_compliance_risk_score: Decimal
    final_risk_score: Decimal
    risk_level: RiskLevel
    explanation: str
    assessed_at: datetime
    assessed_by: str = "System"
    vendor_id: Optional[int] = None

    def scores(self) -> tuple:
        return (
            self.financial_risk_score,
            self.operational_risk_score,
            self.security_compliance_risk_score,
            self.final_risk_score,
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["risk_level"] = self.risk_level.value
        return data
