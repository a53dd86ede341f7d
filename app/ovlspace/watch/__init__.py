"""Usage watch loop with deduplicated alerts and an instance lock."""

from ovlspace.watch.dedup import AlertDeduplicator, UsageAlert
from ovlspace.watch.loop import WatchLoop
from ovlspace.watch.state import (
    AlertState,
    FileValueStore,
    MemoryValueStore,
    PidLock,
    ValueStore,
    pid_alive,
)

__all__ = [
    "AlertDeduplicator",
    "AlertState",
    "FileValueStore",
    "MemoryValueStore",
    "PidLock",
    "UsageAlert",
    "ValueStore",
    "WatchLoop",
    "pid_alive",
]
