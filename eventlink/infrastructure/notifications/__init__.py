"""Live-push infrastructure for notifications and inbox events."""

from .broadcaster import LiveBroadcaster, serialize_notification
from .registry import ConnectionRegistry
from .side_effects import SideEffectResult, run_side_effect

__all__ = [
    "ConnectionRegistry",
    "LiveBroadcaster",
    "SideEffectResult",
    "run_side_effect",
    "serialize_notification",
]
