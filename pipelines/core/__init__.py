"""Core pipeline components - shared base agent and sequential runner."""

from pipelines.core.base_agent import BaseAgent
from pipelines.core.runner import PipelineRunner

__all__ = ["BaseAgent", "PipelineRunner"]
