# apps/dashboard/widgets.py

"""
UI-side primitives shared by the dashboard and the login session:
controls that are disabled while their request is in flight, and the
transient notifications (toasts) shown to the user.
"""

import logging
from collections import deque
from contextlib import contextmanager
from typing import Callable, List, NamedTuple, Optional

from django.conf import settings

logger = logging.getLogger(__name__)

SUCCESS = 'success'
ERROR = 'error'
INFO = 'info'

NOTIFICATION_ICONS = {
    SUCCESS: '✅',
    ERROR: '❌',
    INFO: 'ℹ️',
}


class Control:
    """
    A button or form that triggers a request

    ``disabled`` is true while its request is outstanding; a handler
    called on a disabled control does nothing.
    """

    def __init__(self, name: str):
        self.name = name
        self.disabled = False

    def __repr__(self):
        state = 'disabled' if self.disabled else 'enabled'
        return f"<Control {self.name} {state}>"


@contextmanager
def busy(control: Optional[Control]):
    """
    Disables ``control`` for the duration of the block

    Yields ``False`` without touching the control when it is already
    disabled, so the caller can drop the duplicate action.
    """
    if control is None:
        yield True
        return

    if control.disabled:
        logger.debug("%s ignored: request already in flight", control.name)
        yield False
        return

    control.disabled = True
    try:
        yield True
    finally:
        control.disabled = False


class Notification(NamedTuple):
    message: str
    level: str = INFO

    @property
    def icon(self) -> str:
        return NOTIFICATION_ICONS.get(self.level, NOTIFICATION_ICONS[INFO])


class Notifier:
    """
    Collects notifications in order and forwards them to listeners

    Only the most recent ``limit`` notifications are kept; the presenter
    drains them with ``pop_all``.
    """

    def __init__(self, limit: Optional[int] = None):
        limit = limit or getattr(settings, 'SPMS_NOTIFICATION_LIMIT', 20)
        self._items = deque(maxlen=limit)
        self._listeners: List[Callable[[Notification], None]] = []

    def subscribe(self, listener: Callable[[Notification], None]) -> None:
        self._listeners.append(listener)

    def notify(self, message: str, level: str = INFO) -> Notification:
        notification = Notification(message, level)
        self._items.append(notification)
        for listener in self._listeners:
            listener(notification)
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(message, SUCCESS)

    def error(self, message: str) -> Notification:
        return self.notify(message, ERROR)

    def info(self, message: str) -> Notification:
        return self.notify(message, INFO)

    @property
    def items(self) -> List[Notification]:
        return list(self._items)

    @property
    def last(self) -> Optional[Notification]:
        return self._items[-1] if self._items else None

    def pop_all(self) -> List[Notification]:
        items = list(self._items)
        self._items.clear()
        return items
