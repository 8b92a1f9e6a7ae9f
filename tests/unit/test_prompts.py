"""
Unit tests for prompt building

Ensures:
1. Snapshot fields are interpolated with their currency
2. Missing or falsy optional fields take their defaults
3. The recurring note only appears for recurring purchases
4. Output is deterministic
"""
from app.models.schemas.decision import DecisionRequest
from app.services.decision.prompts import SYSTEM_PROMPT, build_prompts, format_value


def _request(**overrides):
    payload = {
        "item": "Shoes",
        "price": 80,
        "currency": "USD",
        "snapshot": {"balance": 500, "monthlyIncome": 3000, "daysLeftInMonth": 10},
    }
    payload.update(overrides)
    return DecisionRequest.model_validate(payload)


def test_system_prompt_fixes_output_contract():
    """System prompt pins strict JSON output and the decision policy"""
    system, _ = build_prompts(_request())

    assert system == SYSTEM_PROMPT
    assert "Output STRICT JSON ONLY" in system
    assert '"decision": "BUY" | "WAIT" | "NO"' in system
    assert "reasoning: exactly 3 bullet points (strings), max 100 chars each" in system
    assert "suggestion: one short actionable sentence, max 80 chars" in system
    assert 'If insufficient data: decision = "WAIT", confidence <= 60' in system


def test_user_prompt_interpolates_snapshot():
    _, user = build_prompts(_request())

    assert user.startswith("Purchase decision needed:\n\nItem: Shoes\nPrice: 80 USD\n")
    assert "- Current balance: 500 USD" in user
    assert "- Monthly income: 3000 USD" in user
    assert "- Days left in month: 10\n" in user
    assert user.endswith("Provide your decision as JSON only.")


def test_user_prompt_defaults():
    """Absent optional fields render as 0 / none / Other / {}"""
    _, user = build_prompts(_request(snapshot={"balance": 1}))

    assert "Category: Other" in user
    assert "- Average daily spending: 0 USD" in user
    assert "- Recurring expenses: 0 USD" in user
    assert "- Days left in month: 0\n" in user
    assert "- Savings goal: none USD" in user
    assert "- Last 30 day spend: 0 USD" in user
    assert "- Average monthly spend: 0 USD" in user
    assert "- Category totals: {}" in user


def test_falsy_values_take_defaults():
    _, user = build_prompts(_request(
        category="",
        snapshot={"balance": 0, "savingsGoal": 0},
    ))

    assert "Category: Other" in user
    assert "- Current balance: 0 USD" in user
    assert "- Savings goal: none USD" in user


def test_savings_goal_and_category_totals():
    _, user = build_prompts(_request(
        category="Clothing",
        snapshot={"savingsGoal": "Vacation", "categoryTotals": {"Food": 120, "Clothing": 45.5}},
    ))

    assert "Category: Clothing" in user
    assert "- Savings goal: Vacation USD" in user
    assert '- Category totals: {"Food":120,"Clothing":45.5}' in user


def test_recurring_note():
    _, monthly = build_prompts(_request(isRecurring=True))
    _, weekly = build_prompts(_request(isRecurring=True, frequency="weekly"))
    _, one_off = build_prompts(_request(isRecurring=False, frequency="weekly"))

    assert "Note: This is a recurring monthly expense." in monthly
    assert "Note: This is a recurring weekly expense." in weekly
    assert "Note:" not in one_off


def test_prompts_are_deterministic():
    assert build_prompts(_request()) == build_prompts(_request())


def test_format_value_drops_integral_decimal():
    assert format_value(80.0) == "80"
    assert format_value(79.99) == "79.99"
    assert format_value(3) == "3"
    assert format_value("none") == "none"
    assert format_value(True) == "true"


def test_untyped_snapshot_values_render():
    _, user = build_prompts(_request(snapshot={
        "balance": "n/a",
        "daysLeftInMonth": True,
        "savingsGoal": ["house", "car"],
        "categoryTotals": {"Food": None, "Café": 12.0},
    }))

    assert "- Current balance: n/a USD" in user
    assert "- Days left in month: true\n" in user
    assert '- Savings goal: ["house","car"] USD' in user
    assert '- Category totals: {"Food":null,"Café":12.0}' in user


def test_empty_category_totals_list_is_kept():
    _, user = build_prompts(_request(snapshot={"categoryTotals": []}))
    assert "- Category totals: []" in user
