"""Feed pipelines."""

from .most_read import MostReadOrchestrator, build_orchestrator, most_read, most_read_sync

__all__ = ["MostReadOrchestrator", "build_orchestrator", "most_read", "most_read_sync"]
