"""
Decision Pipeline
Runs one "should I buy it?" request through quota, validation, prompt
building and the upstream model.

Stages run strictly in order and any failure ends the request with the
stage's DecisionProxyError. Header checks happen before this, in the route
dependencies.
"""
import logging
from typing import Any, Dict, Optional

from app.core.errors import ServerConfigurationError
from app.services.decision.advisor import DecisionAdvisor
from app.services.decision.prompts import build_prompts
from app.services.decision.validation import parse_decision_request
from app.services.quota.gate import QuotaGate

logger = logging.getLogger(__name__)


class DecisionPipeline:
    """
    Args:
        quota_gate: Daily quota check for the client
        advisor: Upstream adapter, or None when no API key is configured
    """

    def __init__(self, quota_gate: QuotaGate, advisor: Optional[DecisionAdvisor]):
        self.quota_gate = quota_gate
        self.advisor = advisor

    async def run(self, client_id: str, raw_body: bytes) -> Dict[str, Any]:
        await self.quota_gate.check_and_increment(client_id)

        request = parse_decision_request(raw_body)

        if self.advisor is None:
            logger.error("❌ OPENAI_API_KEY secret not set")
            raise ServerConfigurationError()

        logger.info(f"🛒 Decision requested: {request.item} ({request.price} {request.currency})")

        system_prompt, user_prompt = build_prompts(request)
        return await self.advisor.decide(system_prompt, user_prompt)
