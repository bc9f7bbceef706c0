from datetime import date

import pytest

from lessonbook.models.user import User
from lessonbook.scheduling.notifications import (
    build_notification,
    delete_notification,
    format_date,
    lesson_completed_message,
    lesson_request_message,
    list_notifications,
    mark_all_read,
    mark_read,
    unread_count,
)
from tests.conftest import test_session


class TestMessages:
    def test_format_date(self) -> None:
        assert format_date(date(2026, 3, 2)) == "Monday, March 2, 2026"

    def test_lesson_request_message(self) -> None:
        message = lesson_request_message("Sam Student", date(2026, 3, 2), "09:30")
        assert message == "New lesson request from Sam Student on Monday, March 2, 2026 at 09:30"

    def test_lesson_completed_message(self) -> None:
        assert "Sunday, March 1, 2026" in lesson_completed_message(date(2026, 3, 1))

    def test_build_notification_is_unread(self) -> None:
        notification = build_notification(7, "lesson_confirmed", "ok", related_id=3)
        assert notification.user_id == 7
        assert notification.read is False
        assert notification.related_id == 3

    def test_build_notification_rejects_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="payment_due"):
            build_notification(7, "payment_due", "pay up")


class TestInbox:
    async def _seed(self) -> tuple[int, int]:
        async with test_session() as session:
            alice = User(name="Alice", email="alice@example.com")
            bob = User(name="Bob", email="bob@example.com")
            session.add_all([alice, bob])
            await session.flush()
            session.add_all(
                [
                    build_notification(alice.id, "lesson_confirmed", "first"),
                    build_notification(alice.id, "lesson_cancelled", "second"),
                    build_notification(bob.id, "lesson_request", "for bob"),
                ]
            )
            await session.commit()
            return alice.id, bob.id

    async def test_list_only_own(self) -> None:
        alice_id, _ = await self._seed()
        async with test_session() as session:
            notifications = await list_notifications(session, alice_id)
        assert sorted(n.message for n in notifications) == ["first", "second"]

    async def test_mark_read_and_unread_filter(self) -> None:
        alice_id, _ = await self._seed()
        async with test_session() as session:
            first = (await list_notifications(session, alice_id))[0]
            updated = await mark_read(session, first.id)
            assert updated is not None
            assert updated.read is True
            unread = await list_notifications(session, alice_id, unread_only=True)
        assert len(unread) == 1
        assert unread[0].id != first.id

    async def test_mark_read_missing(self) -> None:
        async with test_session() as session:
            assert await mark_read(session, 404) is None

    async def test_mark_all_read(self) -> None:
        alice_id, bob_id = await self._seed()
        async with test_session() as session:
            assert await mark_all_read(session, alice_id) == 2
            assert await mark_all_read(session, alice_id) == 0

        async with test_session() as session:
            assert await list_notifications(session, alice_id, unread_only=True) == []
            assert len(await list_notifications(session, bob_id, unread_only=True)) == 1

    async def test_unread_count(self) -> None:
        alice_id, bob_id = await self._seed()
        async with test_session() as session:
            assert await unread_count(session, alice_id) == 2
            assert await unread_count(session, bob_id) == 1
            await mark_all_read(session, alice_id)
            assert await unread_count(session, alice_id) == 0

    async def test_delete_notification(self) -> None:
        alice_id, _ = await self._seed()
        async with test_session() as session:
            target = (await list_notifications(session, alice_id))[0]
            assert await delete_notification(session, target.id) is True
            assert await delete_notification(session, target.id) is False
            remaining = await list_notifications(session, alice_id)
        assert len(remaining) == 1
        assert remaining[0].id != target.id
