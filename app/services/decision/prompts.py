"""
Decision Prompts
Renders the system and user instructions sent to the completion API.

Pure functions: same request in, same prompts out. Optional fields never
raise; a missing or falsy value takes its default.
"""
import json
from typing import Any, Tuple

from app.models.schemas.decision import DecisionRequest
from app.services.decision.validation import is_blank


SYSTEM_PROMPT = """You are Pezo, a conservative and practical spending coach.

You do NOT provide financial/investment advice.

Decide only based on provided data.

Output STRICT JSON ONLY. No markdown, no code blocks, just pure JSON.

Response format:
{
  "decision": "BUY" | "WAIT" | "NO",
  "confidence": 0-100,
  "reasoning": ["bullet point 1", "bullet point 2", "bullet point 3"],
  "suggestion": "one short action sentence"
}

Rules:
- decision: "BUY" if affordable and reasonable, "WAIT" if uncertain or insufficient data, "NO" if clearly unaffordable
- confidence: 0-100 integer
- reasoning: exactly 3 bullet points (strings), max 100 chars each
- suggestion: one short actionable sentence, max 80 chars
- If insufficient data: decision = "WAIT", confidence <= 60"""


USER_PROMPT_TEMPLATE = """Purchase decision needed:

Item: {item}
Price: {price} {currency}
Category: {category}

Financial snapshot:
- Current balance: {balance} {currency}
- Monthly income: {monthly_income} {currency}
- Average daily spending: {avg_daily_spending} {currency}
- Recurring expenses: {recurring_expenses} {currency}
- Days left in month: {days_left_in_month}
- Savings goal: {savings_goal} {currency}
- Last 30 day spend: {last_30_day_spend} {currency}
- Average monthly spend: {avg_monthly_spend} {currency}
- Category totals: {category_totals}

{recurring_note}

Provide your decision as JSON only."""


RECURRING_NOTE_TEMPLATE = "Note: This is a recurring {frequency} expense."


def _or_default(value: Any, default: Any) -> Any:
    return default if is_blank(value) else value


def format_value(value: Any) -> str:
    """Render a snapshot value for the prompt; integral floats drop their '.0'."""
    if value is True:
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return _compact_json(value)
    return str(value)


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def build_user_prompt(request: DecisionRequest) -> str:
    snapshot = request.snapshot

    if request.is_recurring:
        recurring_note = RECURRING_NOTE_TEMPLATE.format(
            frequency=_or_default(request.frequency, "monthly")
        )
    else:
        recurring_note = ""

    return USER_PROMPT_TEMPLATE.format(
        item=request.item,
        price=format_value(request.price),
        currency=request.currency,
        category=_or_default(request.category, "Other"),
        balance=format_value(_or_default(snapshot.balance, 0)),
        monthly_income=format_value(_or_default(snapshot.monthly_income, 0)),
        avg_daily_spending=format_value(_or_default(snapshot.avg_daily_spending, 0)),
        recurring_expenses=format_value(_or_default(snapshot.recurring_expenses, 0)),
        days_left_in_month=format_value(_or_default(snapshot.days_left_in_month, 0)),
        savings_goal=format_value(_or_default(snapshot.savings_goal, "none")),
        last_30_day_spend=format_value(_or_default(snapshot.last_30_day_spend, 0)),
        avg_monthly_spend=format_value(_or_default(snapshot.avg_monthly_spend, 0)),
        category_totals=_compact_json(_or_default(snapshot.category_totals, {})),
        recurring_note=recurring_note,
    )


def build_prompts(request: DecisionRequest) -> Tuple[str, str]:
    """
    Build the (system, user) instruction pair for a decision request.

    Args:
        request: Validated decision request

    Returns:
        Tuple of system prompt and user prompt
    """
    return SYSTEM_PROMPT, build_user_prompt(request)
