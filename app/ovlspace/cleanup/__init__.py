"""Reclaiming overlay space from caches, trash and logs."""

from ovlspace.cleanup.engine import CleanupEngine, CleanupFailure, CleanupReport

__all__ = ["CleanupEngine", "CleanupFailure", "CleanupReport"]
