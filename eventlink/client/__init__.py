"""Python client for following a user's live notifications."""

from .subscriber import NotificationSubscriber, QueryCache, TabTitle

__all__ = ["NotificationSubscriber", "QueryCache", "TabTitle"]
