"""Best-effort execution of work that must never fail the primary write."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SideEffectResult:
    description: str
    ok: bool
    error: Exception | None = None


def run_side_effect(
    description: str, action: Callable[..., Any], *args: Any, **kwargs: Any
) -> SideEffectResult:
    """Run ``action`` and report failures through the log instead of raising."""

    try:
        action(*args, **kwargs)
    except Exception as exc:
        logger.warning("Side effect '%s' failed: %s", description, exc)
        return SideEffectResult(description=description, ok=False, error=exc)
    return SideEffectResult(description=description, ok=True)


__all__ = ["SideEffectResult", "run_side_effect"]
