import asyncio
import logging
from typing import Dict, List, Literal
from uuid import uuid4

from pydantic import BaseModel, Field

log = logging.getLogger(__name__)

NotificationType = Literal["success", "error"]

class Notification(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    message: str
    type: NotificationType

class NotificationCenter:
    """
        Ordered stack of transient notifications.
        Each one expires on its own timer after `timeout` seconds unless
        dismissed first. Timers run on the current event loop.
    """
    def __init__(self, timeout: float = 5.0):
        self.timeout = timeout
        self._items: List[Notification] = []
        self._timers: Dict[str, asyncio.TimerHandle] = {}

    @property
    def items(self) -> List[Notification]:
        return list(self._items)

    def notify(self, message: str, type: NotificationType) -> Notification:
        notification = Notification(message=message, type=type)
        self._items.append(notification)
        loop = asyncio.get_running_loop()
        self._timers[notification.id] = loop.call_later(self.timeout, self._expire, notification.id)
        log.debug("Notification %s (%s): %s", notification.id, type, message)
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(message, "success")

    def error(self, message: str) -> Notification:
        return self.notify(message, "error")

    def dismiss(self, notification_id: str):
        timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.cancel()
        self._items = [n for n in self._items if n.id != notification_id]

    def _expire(self, notification_id: str):
        self._timers.pop(notification_id, None)
        self._items = [n for n in self._items if n.id != notification_id]

    def clear(self):
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._items.clear()
