from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    BREAKING_NEWS = "BREAKING_NEWS"
    LOCAL_NEWS = "LOCAL_NEWS"


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    title: str
    body: str
    url: str
    location: Location | None = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


def is_breaking(title: str) -> bool:
    return "breaking" in title.lower()


class NotificationCenter:
    """Builds breaking/local news notifications and hands them to a handler.

    Delivery to the OS is someone else's job: each notification is only
    recorded in :attr:`delivered` and passed to *handler*.
    """

    def __init__(
        self,
        *,
        notifications_authorized: bool = False,
        location_authorized: bool = False,
        handler: Callable[[Notification], None] | None = None,
    ) -> None:
        self.notifications_authorized = notifications_authorized
        self.location_authorized = location_authorized
        self.location: Location | None = None
        self.handler = handler
        self.delivered: list[Notification] = []

    def update_location(self, latitude: float, longitude: float) -> None:
        self.location = Location(latitude, longitude)
        logger.debug("Location updated: %s, %s", latitude, longitude)

    def notify_breaking(self, title: str, body: str, url: str) -> Notification | None:
        if not self.notifications_authorized:
            return None
        return self._deliver(Notification(
            kind=NotificationKind.BREAKING_NEWS,
            title=f"Breaking: {title}",
            body=body,
            url=url,
        ))

    def notify_local(self, title: str, body: str, url: str) -> Notification | None:
        if not (self.notifications_authorized and self.location_authorized):
            return None
        if self.location is None:
            return None
        return self._deliver(Notification(
            kind=NotificationKind.LOCAL_NEWS,
            title=f"Local News: {title}",
            body=body,
            url=url,
            location=self.location,
        ))

    def _deliver(self, notification: Notification) -> Notification:
        self.delivered.append(notification)
        logger.debug("Notification %s: %s", notification.kind.value, notification.title)
        if self.handler is not None:
            self.handler(notification)
        return notification
