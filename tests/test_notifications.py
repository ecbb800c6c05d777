from __future__ import annotations

from newsnexus.services.notifications import (
    Location,
    NotificationCenter,
    NotificationKind,
    is_breaking,
)


def test_is_breaking() -> None:
    assert is_breaking("BREAKING: Storm hits coast")
    assert is_breaking("Markets in freefall as records keep breaking")
    assert not is_breaking("Storm hits coast")


class TestBreaking:
    def test_requires_authorization(self) -> None:
        center = NotificationCenter()
        assert center.notify_breaking("Storm", "Body", "https://e.com/a") is None
        assert center.delivered == []

    def test_delivers_to_handler(self) -> None:
        received = []
        center = NotificationCenter(notifications_authorized=True, handler=received.append)

        note = center.notify_breaking("Storm hits coast", "Gusts of 70mph", "https://e.com/a")

        assert note is not None
        assert note.kind is NotificationKind.BREAKING_NEWS
        assert note.title == "Breaking: Storm hits coast"
        assert note.url == "https://e.com/a"
        assert received == [note]
        assert center.delivered == [note]


class TestLocal:
    def test_requires_location_authorization(self) -> None:
        center = NotificationCenter(notifications_authorized=True)
        center.update_location(51.5, -0.12)
        assert center.notify_local("Road closed", "Body", "https://e.com/b") is None

    def test_requires_known_location(self) -> None:
        center = NotificationCenter(notifications_authorized=True, location_authorized=True)
        assert center.notify_local("Road closed", "Body", "https://e.com/b") is None

    def test_carries_location(self) -> None:
        center = NotificationCenter(notifications_authorized=True, location_authorized=True)
        center.update_location(51.5, -0.12)

        note = center.notify_local("Road closed", "High Street shut", "https://e.com/b")

        assert note is not None
        assert note.kind is NotificationKind.LOCAL_NEWS
        assert note.title == "Local News: Road closed"
        assert note.location == Location(51.5, -0.12)
