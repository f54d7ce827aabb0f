"""Tests for marking notifications as read or unread."""

from __future__ import annotations

from datetime import timedelta

import pytest

from mailroom.application.mailbox import get_mailbox
from mailroom.application.use_cases.notifications import (
    is_read,
    is_unread,
    mark_as_read,
    mark_as_unread,
    notify,
    notify_all,
)
from mailroom.domain.entities import Notification, User
from mailroom.domain.errors import NotFoundError


def test_notifications_are_unread_by_default(session, settings, clock, alice):
    notify(session, alice, "Subject", "Body", settings=settings, clock=clock)
    notification = get_mailbox(session, alice).receipts.first().notification

    assert is_unread(session, notification, alice) is True
    assert is_read(session, notification, alice) is False


def test_mark_as_read_and_back(session, settings, clock, alice):
    notification = notify(session, alice, "Subject", "Body", settings=settings, clock=clock).target

    receipt = mark_as_read(session, notification, alice, clock=clock)

    assert receipt.is_read is True
    assert receipt.read_at == clock.now
    assert is_read(session, notification, alice) is True
    assert is_unread(session, notification, alice) is False

    receipt = mark_as_unread(session, notification, alice, clock=clock)

    assert receipt.is_read is False
    assert receipt.read_at is None
    assert is_read(session, notification, alice) is False
    assert is_unread(session, notification, alice) is True


def test_mark_as_read_is_idempotent(session, settings, clock, alice):
    notification = notify(session, alice, "Subject", "Body", settings=settings, clock=clock).target
    mark_as_read(session, notification, alice, clock=clock)
    first_read = clock.now

    clock.advance(timedelta(hours=1))
    receipt = mark_as_read(session, notification, alice, clock=clock)

    assert receipt.is_read is True
    assert receipt.read_at == first_read


def test_read_state_is_tracked_per_recipient(session, settings, clock, users):
    alice, bob, carol = users
    notification = notify_all(session, users, "Subject", "Body", settings=settings, clock=clock)

    mark_as_read(session, notification, bob, clock=clock)

    assert is_read(session, notification, bob) is True
    assert is_unread(session, notification, alice) is True
    assert is_unread(session, notification, carol) is True
    assert get_mailbox(session, bob).unread_count() == 0
    assert get_mailbox(session, alice).unread_count() == 1


def test_missing_receipts_raise_on_writes(session, settings, clock, alice, bob):
    notification = notify(session, alice, "Subject", "Body", settings=settings, clock=clock).target

    with pytest.raises(NotFoundError):
        mark_as_read(session, notification, bob, clock=clock)
    with pytest.raises(NotFoundError):
        mark_as_unread(session, notification, bob, clock=clock)


def test_missing_receipts_read_as_false(session, settings, clock, alice, bob):
    notification = notify(session, alice, "Subject", "Body", settings=settings, clock=clock).target
    unsaved = Notification(id=None, subject="Draft", body="Body")

    assert is_read(session, notification, bob) is False
    assert is_unread(session, notification, bob) is False
    assert is_read(session, unsaved, alice) is False
    assert is_unread(session, unsaved, alice) is False


def test_unsaved_participants_read_as_false(session, settings, clock, alice):
    notification = notify(session, alice, "Subject", "Body", settings=settings, clock=clock).target
    unsaved = User(id=None, name="Draft", email="draft@example.com")

    assert is_read(session, notification, unsaved) is False
    assert is_unread(session, notification, unsaved) is False
