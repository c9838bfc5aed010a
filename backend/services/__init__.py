"""
Service layer for business logic.
"""

from .freemium_gate import GateDecision, GateResult, evaluate, remaining_free
from .generation import GenerationOutcome, GenerationService, VideoKind
from .subscription_lifecycle import LifecycleOutcome, SubscriptionLifecycleHandler
from .template_selector import classify_topic, normalize_mode, select_content, select_video_script
from .usage_ledger import UsageLedger

__all__ = [
    "GateDecision",
    "GateResult",
    "evaluate",
    "remaining_free",
    "GenerationOutcome",
    "GenerationService",
    "VideoKind",
    "LifecycleOutcome",
    "SubscriptionLifecycleHandler",
    "classify_topic",
    "normalize_mode",
    "select_content",
    "select_video_script",
    "UsageLedger",
]
