"""
Decision Schemas
Request payload sent by the app and the decision object returned to it
"""
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class FinancialSnapshot(BaseModel):
    """
    User's current financial picture.

    Every field is optional and untyped: whatever the app sends is rendered
    into the prompt as-is, with defaults for missing or falsy values.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    balance: Any = None
    monthly_income: Any = Field(default=None, alias="monthlyIncome")
    avg_daily_spending: Any = Field(default=None, alias="avgDailySpending")
    recurring_expenses: Any = Field(default=None, alias="recurringExpenses")
    days_left_in_month: Any = Field(default=None, alias="daysLeftInMonth")
    savings_goal: Any = Field(default=None, alias="savingsGoal")
    last_30_day_spend: Any = Field(default=None, alias="last30DaySpend")
    avg_monthly_spend: Any = Field(default=None, alias="avgMonthlySpend")
    category_totals: Any = Field(default=None, alias="categoryTotals")


class DecisionRequest(BaseModel):
    """Purchase the user is considering"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    item: str
    price: float
    currency: str
    category: Optional[str] = None
    is_recurring: Optional[bool] = Field(default=None, alias="isRecurring")
    frequency: Optional[str] = None
    snapshot: FinancialSnapshot

    @field_validator("snapshot", mode="before")
    @classmethod
    def snapshot_as_object(cls, value: Any) -> Any:
        # A non-object snapshot has no readable fields
        return value if isinstance(value, (dict, FinancialSnapshot)) else {}


class Decision(BaseModel):
    """
    Decision returned by the model.

    Strict: values must already have the right JSON type. The object is
    passed through to the client exactly as the model wrote it.
    """

    model_config = ConfigDict(strict=True, extra="allow")

    decision: Literal["BUY", "WAIT", "NO"]
    confidence: float = Field(ge=0, le=100)
    reasoning: List[Any]
    suggestion: StrictStr = Field(min_length=1)
