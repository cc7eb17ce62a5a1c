from datetime import datetime
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, Optional

from vendor_risk.core.logger import get_logger
from vendor_risk.core.settings import get_settings
from vendor_risk.services.risk_model.assessment import (
    RiskAssessmentResult,
    final_risk_score,
    risk_level_for,
)
from vendor_risk.services.risk_model.profile import VendorSnapshot

log = get_logger(__name__)

MAX_RISK = Decimal("1.0")
NO_RISK = Decimal("0.0")

POSITIVE_EXPLANATION = (
    "Vendor meets all compliance and operational standards with minimal risk indicators."
)

# Hook de instrumentacion: (evento, campos)
ScoringHook = Callable[[str, dict], None]


class RiskScorer:
    """
    Scorer determinista por reglas.
      - Riesgo financiero (40%)
      - Riesgo operacional (30%)
      - Riesgo de seguridad / cumplimiento (30%)

    No guarda estado entre llamadas; los hooks solo observan.
    """

    def __init__(
        self,
        rounding: str = ROUND_HALF_EVEN,
        assessed_by: str = "System",
        hooks: Iterable[ScoringHook] = (),
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.rounding = rounding
        self.assessed_by = assessed_by
        self.hooks = tuple(hooks)
        self.clock = clock

    def assess(self, vendor: VendorSnapshot) -> RiskAssessmentResult:
        log.info(f"Iniciando evaluacion de riesgo del proveedor {vendor.vendor_id}: {vendor.name}")

        financial = self.financial_risk(vendor)
        operational = self.operational_risk(vendor)
        security = self.security_compliance_risk(vendor)

        final = final_risk_score(financial, operational, security, rounding=self.rounding)
        level = risk_level_for(final)

        result = RiskAssessmentResult(
            financial_risk_score=financial,
            operational_risk_score=operational,
            security_compliance_risk_score=security,
            final_risk_score=final,
            risk_level=level,
            explanation=self.explain(vendor),
            assessed_at=self.clock(),
            assessed_by=self.assessed_by,
            vendor_id=vendor.vendor_id,
        )

        log.info(
            f"Evaluacion completada para el proveedor {vendor.vendor_id}: "
            f"Financial={financial:.2f}, Operational={operational:.2f}, "
            f"Security={security:.2f}, Final={final:.2f}, Level={level.value}"
        )
        self._emit("assessment_completed", vendor_id=vendor.vendor_id, result=result)
        return result

    # Riesgo financiero (escalones por financial_health)
    def financial_risk(self, vendor: VendorSnapshot) -> Decimal:
        health = vendor.financial_health

        if health < 50:
            log.warning(f"Riesgo financiero alto para el proveedor {vendor.vendor_id}: FinancialHealth={health}")
            score = Decimal("0.80")
        elif health < 60:
            log.info(f"Riesgo financiero medio-alto para el proveedor {vendor.vendor_id}: FinancialHealth={health}")
            score = Decimal("0.60")
        elif health < 70:
            score = Decimal("0.40")
        elif health < 80:
            score = Decimal("0.25")
        else:
            log.debug(f"Riesgo financiero bajo para el proveedor {vendor.vendor_id}: FinancialHealth={health}")
            score = Decimal("0.10")

        self._emit("financial_risk", vendor_id=vendor.vendor_id, score=score)
        return score

    # Riesgo operacional = SLA + incidentes (max 1.0)
    def operational_risk(self, vendor: VendorSnapshot) -> Decimal:
        uptime = vendor.sla_uptime
        incidents = vendor.major_incidents

        if uptime < 90:
            log.warning(f"SLA critico para el proveedor {vendor.vendor_id}: {uptime}%")
            uptime_penalty = Decimal("0.50")
        elif uptime < 95:
            log.warning(f"SLA bajo para el proveedor {vendor.vendor_id}: {uptime}%")
            uptime_penalty = Decimal("0.35")
        elif uptime < 99:
            uptime_penalty = Decimal("0.15")
        else:
            uptime_penalty = Decimal("0.05")

        if incidents > 3:
            log.warning(f"Muchos incidentes para el proveedor {vendor.vendor_id}: {incidents}")
            incident_penalty = Decimal("0.40")
        elif incidents > 2:
            log.info(f"Varios incidentes para el proveedor {vendor.vendor_id}: {incidents}")
            incident_penalty = Decimal("0.25")
        elif incidents > 0:
            incident_penalty = Decimal("0.10")
        else:
            incident_penalty = NO_RISK

        score = min(uptime_penalty + incident_penalty, MAX_RISK)
        self._emit(
            "operational_risk",
            vendor_id=vendor.vendor_id,
            uptime_penalty=uptime_penalty,
            incident_penalty=incident_penalty,
            score=score,
        )
        return score

    # Riesgo de seguridad y cumplimiento (max 1.0)
    def security_compliance_risk(self, vendor: VendorSnapshot) -> Decimal:
        score = NO_RISK

        if not vendor.has_any_certifications():
            log.warning(f"El proveedor {vendor.vendor_id} no tiene certificaciones de seguridad")
            score += Decimal("0.40")
        else:
            if not vendor.has_iso27001():
                log.info(f"Al proveedor {vendor.vendor_id} le falta ISO27001")
                score += Decimal("0.20")
            # Solo se evalua si tiene alguna certificacion
            if not vendor.has_soc2() and not vendor.has_pci():
                score += Decimal("0.10")

        docs = vendor.documents
        invalid_count = docs.invalid_document_count()
        if invalid_count > 0:
            log.warning(
                f"El proveedor {vendor.vendor_id} tiene {invalid_count} documento(s) invalido(s): "
                f"{', '.join(docs.invalid_documents())}"
            )

        if invalid_count == 3:
            score += Decimal("0.50")
        elif invalid_count == 2:
            score += Decimal("0.30")
        elif invalid_count == 1:
            score += Decimal("0.15")

        # Recargos fijos, se suman al conteo
        if not docs.privacy_policy_valid:
            score += Decimal("0.10")
        if not docs.pentest_report_valid:
            score += Decimal("0.15")

        score = min(score, MAX_RISK)
        self._emit(
            "security_compliance_risk",
            vendor_id=vendor.vendor_id,
            invalid_documents=invalid_count,
            score=score,
        )
        return score

    def explain(self, vendor: VendorSnapshot) -> str:
        reasons = []

        health = vendor.financial_health
        if health < 50:
            reasons.append(f"Critical financial health ({health}/100)")
        elif health < 70:
            reasons.append(f"Moderate financial health ({health}/100)")

        if vendor.has_poor_sla():
            reasons.append(f"SLA uptime below 95% ({format_percentage(vendor.sla_uptime)}%)")

        incidents = vendor.major_incidents
        if incidents > 2:
            reasons.append(f"Multiple major incidents ({incidents} in last 12 months)")
        elif incidents > 0:
            reasons.append(f"{incidents} major incident(s) in last 12 months")

        if not vendor.has_iso27001():
            reasons.append("Missing ISO27001 certification")

        invalid_docs = vendor.documents.invalid_documents()
        if invalid_docs:
            reasons.append(f"Invalid/expired documents: {', '.join(invalid_docs)}")

        if not reasons:
            return POSITIVE_EXPLANATION

        return " + ".join(reasons)

    def _emit(self, event: str, **fields) -> None:
        for hook in self.hooks:
            try:
                hook(event, fields)
            except Exception:
                # Un hook roto no cambia el resultado
                log.exception(f"Fallo el hook de scoring {hook!r} en el evento '{event}'")


def format_percentage(value: Decimal) -> str:
    # Siempre 2 decimales, redondeando .5 hacia arriba (88 -> 88.00)
    return str(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def build_risk_scorer(hooks: Optional[Iterable[ScoringHook]] = None) -> RiskScorer:
    settings = get_settings()
    return RiskScorer(
        rounding=settings.rounding_mode,
        assessed_by=settings.ASSESSED_BY,
        hooks=hooks or (),
    )


risk_scorer = build_risk_scorer()
