"""
Purchase decision pipeline
"""
from app.services.decision.advisor import DecisionAdvisor, create_completion_client
from app.services.decision.pipeline import DecisionPipeline
from app.services.decision.prompts import SYSTEM_PROMPT, build_prompts

__all__ = [
    "DecisionAdvisor",
    "DecisionPipeline",
    "SYSTEM_PROMPT",
    "build_prompts",
    "create_completion_client",
]
