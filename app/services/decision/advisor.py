"""
Decision Advisor
Calls the OpenAI chat completion API and returns a validated decision.

One attempt per request: the client is built with max_retries=0 and this
module never retries.
"""
import logging
from typing import Any, Dict, Optional

import openai
from openai import AsyncOpenAI

from app.core.config import Settings
from app.core.errors import EmptyCompletionError, UpstreamUnavailableError
from app.services.decision.normalize import normalize_completion

logger = logging.getLogger(__name__)


def create_completion_client(settings: Settings) -> Optional[AsyncOpenAI]:
    """
    Build the OpenAI client, or None when no API key is configured.

    A missing key is reported per request as a server configuration error,
    so startup does not fail.
    """
    if not settings.openai_api_key:
        logger.error("❌ OPENAI_API_KEY not set - decisions will fail with 500")
        return None

    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        timeout=settings.openai_timeout,
        max_retries=0,
    )


def _first_message_content(response: Any) -> Optional[str]:
    choices = getattr(response, "choices", None)
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None)


class DecisionAdvisor:
    """
    Upstream adapter for purchase decisions.

    Usage:
        advisor = DecisionAdvisor(client, model="gpt-4o-mini")
        decision = await advisor.decide(system_prompt, user_prompt)
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = "gpt-4o-mini",
        temperature: float = 0.2,
        max_tokens: int = 500,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(cls, client: AsyncOpenAI, settings: Settings) -> "DecisionAdvisor":
        return cls(
            client,
            model=settings.openai_model,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
        )

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        Run the completion and return the first choice's text.

        Raises:
            UpstreamUnavailableError: API error, connection failure or timeout
            EmptyCompletionError: No choice or empty content
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                response_format={"type": "json_object"},
                max_tokens=self.max_tokens,
            )
        except openai.APIStatusError as e:
            logger.error(f"OpenAI API error ({e.status_code}): {e.response.text}")
            raise UpstreamUnavailableError()
        except openai.APIError as e:
            logger.error(f"OpenAI API error: {e}")
            raise UpstreamUnavailableError()

        content = _first_message_content(response)
        if not content:
            logger.error("OpenAI returned no message content")
            raise EmptyCompletionError()

        return content

    async def decide(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        """Get a structurally valid decision object from the model."""
        content = await self.complete(system_prompt, user_prompt)
        decision = normalize_completion(content)
        logger.info(f"🤖 Decision: {decision['decision']} ({decision['confidence']}%)")
        return decision
