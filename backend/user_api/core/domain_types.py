"""Domain Types: identity type for users and the connection lifecycle states.

Invariants:
    - UserId wraps the engine-assigned integer primary key
    - Connection lifecycle is an explicit Enum, never inferred from None checks
    - READY is the only state in which statements are submitted to the engine

Design Decisions:
    - NewType over dataclass wrapper: zero runtime cost, full type-checker support
    - str Enum: serializes to JSON (readiness probe) without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Enums ───────────────────────────────────────────────────────

class ConnectionState(str, Enum):
    """Connection lifecycle.

    uninitialized -> connecting -> ready -> lost -> connecting -> ...
    connecting -> failed       (bounded retry policy exhausted)
    any -> stopped             (application shutdown)
    """
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"
    LOST = "lost"
    FAILED = "failed"
    STOPPED = "stopped"
