# AI Adapters
# Replicate generative video

from .video_adapter import (
    ReplicateVideoService,
    available_models,
    model_capabilities,
)

__all__ = [
    "ReplicateVideoService",
    "available_models",
    "model_capabilities",
]
