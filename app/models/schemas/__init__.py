"""
API Schemas
Pydantic models for the decision endpoint
"""
from app.models.schemas.decision import Decision, DecisionRequest, FinancialSnapshot

__all__ = [
    "Decision",
    "DecisionRequest",
    "FinancialSnapshot",
]
