"""Transient notifications shown as toasts in the browser."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional


class Variant(str, Enum):
    """Visual style of a notification."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Notification:
    """A short-lived message about the outcome of an action."""

    message: str
    variant: Variant = Variant.SUCCESS

    @classmethod
    def success(cls, message: str) -> "Notification":
        return cls(message, Variant.SUCCESS)

    @classmethod
    def error(cls, message: str) -> "Notification":
        return cls(message, Variant.ERROR)

    @classmethod
    def warning(cls, message: str) -> "Notification":
        return cls(message, Variant.WARNING)

    def to_dict(self) -> Dict[str, str]:
        return {"message": self.message, "variant": self.variant.value}


# Client-side event the toast script in base.html listens for
NOTIFY_EVENT = "notify"


def hx_trigger_header(
    notifications: Iterable[Notification],
    events: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """Serialize notifications and extra events for the HX-Trigger header.

    Args:
        notifications: Notifications to show, in order.
        events: Additional client events, e.g. ``{"courseCreated": {...}}``.

    Returns:
        JSON string for the header, or None when there is nothing to trigger.
    """
    payload: Dict[str, Any] = dict(events or {})
    items = [n.to_dict() for n in notifications]
    if items:
        payload[NOTIFY_EVENT] = {"items": items}
    if not payload:
        return None
    return json.dumps(payload)
