from vendor_risk.services.risk_model.risk_scorer import RiskScorer, risk_scorer


# Scorer compartido (sin estado); los tests lo reemplazan con dependency_overrides
def get_risk_scorer() -> RiskScorer:
    return risk_scorer
