"""Tests for notification fan-out."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

import pytest
from sqlalchemy.exc import SQLAlchemyError

from mailroom.application.mailbox import get_mailbox
from mailroom.application.use_cases.notifications import (
    dispatch_notification,
    notify,
    notify_all,
)
from mailroom.domain.entities import Notification
from mailroom.domain.errors import StorageError, ValidationError
from mailroom.infrastructure.models import NotificationModel, ReceiptModel


@dataclass
class Team:
    id: int


def _assert_single_notification(session, participant, clock, subject="Subject", body="Body"):
    mailbox = get_mailbox(session, participant, clock=clock)

    assert mailbox.receipts.count() == 1
    receipt = mailbox.receipts.first()
    assert receipt.notification.subject == subject
    assert receipt.notification.body == body

    assert len(mailbox.notifications) == 1
    notification = mailbox.notifications.first()
    assert isinstance(notification, Notification)
    assert notification.subject == subject
    assert notification.body == body


def test_notify_one_user(session, settings, clock, alice):
    receipt = notify(session, alice, "Subject", "Body", settings=settings, clock=clock)

    assert receipt.receiver_type == "user"
    assert receipt.receiver_id == alice.id
    assert receipt.is_read is False
    assert receipt.mailbox_type is None
    _assert_single_notification(session, alice, clock)


def test_notify_all_several_users(session, settings, clock, users):
    notification = notify_all(session, users, "Subject", "Body", settings=settings, clock=clock)

    assert notification.id is not None
    for user in users:
        _assert_single_notification(session, user, clock)
        assert get_mailbox(session, user).notifications.first().id == notification.id


def test_notify_all_accepts_a_single_recipient(session, settings, clock, alice):
    notify_all(session, alice, "Subject", "Body", settings=settings, clock=clock)

    _assert_single_notification(session, alice, clock)


def test_receipts_share_the_same_notification_instance(session, settings, clock, users):
    delivery = dispatch_notification(
        session, users, "Subject", "Body", settings=settings, clock=clock
    )

    assert len(delivery.receipts) == 3
    assert len({receipt.id for receipt in delivery.receipts}) == 3
    assert all(receipt.target is delivery.notification for receipt in delivery.receipts)
    assert [receipt.receiver_id for receipt in delivery.receipts] == [user.id for user in users]
    assert delivery.receipt_for(users[1]) is delivery.receipts[1]


def test_duplicate_recipients_collapse(session, settings, clock, alice, bob):
    delivery = dispatch_notification(
        session, [alice, bob, alice, bob], "Subject", "Body", settings=settings, clock=clock
    )

    assert [receipt.receiver_id for receipt in delivery.receipts] == [alice.id, bob.id]
    assert session.query(ReceiptModel).count() == 2


def test_participants_of_different_types_are_distinct(session, settings, clock, alice):
    team = Team(id=alice.id)

    delivery = dispatch_notification(
        session, [alice, team], "Subject", "Body", settings=settings, clock=clock
    )

    assert [(r.receiver_type, r.receiver_id) for r in delivery.receipts] == [
        ("user", alice.id),
        ("team", alice.id),
    ]
    _assert_single_notification(session, team, clock)


def test_sender_and_expiry_are_stored(session, settings, clock, alice, bob):
    expires = clock.now + timedelta(days=1)

    notification = notify_all(
        session,
        [bob],
        "Subject",
        "Body",
        sender=alice,
        expires=expires,
        notification_code="welcome",
        settings=settings,
        clock=clock,
    )

    stored = get_mailbox(session, bob, clock=clock).notifications.first()
    assert stored.sender_type == "user"
    assert stored.sender_id == alice.id
    assert stored.expires == expires
    assert stored.notification_code == "welcome"
    assert stored.created_at == clock.now
    assert stored.is_system is False
    assert notification.is_system is False


def test_system_notifications_have_no_sender(session, settings, clock, alice):
    notification = notify_all(session, alice, "Subject", "Body", settings=settings, clock=clock)

    assert notification.is_system is True


@pytest.mark.parametrize(
    ("subject", "body", "field"),
    [
        ("", "Body", "subject"),
        ("   ", "Body", "subject"),
        (None, "Body", "subject"),
        ("x" * 21, "Body", "subject"),
        ("Subject", "", "body"),
        ("Subject", None, "body"),
        ("Subject", "x" * 51, "body"),
        (5, "Body", "subject"),
        (["Subject"], "Body", "subject"),
        ("Subject", 42, "body"),
    ],
)
def test_invalid_content_is_rejected_before_any_write(
    session, settings, clock, users, subject, body, field
):
    with pytest.raises(ValidationError) as excinfo:
        notify_all(session, users, subject, body, settings=settings, clock=clock)

    assert excinfo.value.field == field
    assert session.query(NotificationModel).count() == 0
    assert session.query(ReceiptModel).count() == 0


def test_content_at_the_maximum_length_is_accepted(session, settings, clock, alice):
    notify(session, alice, "s" * 20, "b" * 50, settings=settings, clock=clock)

    assert session.query(ReceiptModel).count() == 1


@pytest.mark.parametrize("recipients", [[], (), None])
def test_recipients_are_required(session, settings, clock, recipients):
    with pytest.raises(ValidationError) as excinfo:
        notify_all(session, recipients, "Subject", "Body", settings=settings, clock=clock)

    assert excinfo.value.field == "recipients"
    assert session.query(NotificationModel).count() == 0


def test_unsaved_recipients_are_rejected(session, settings, clock):
    with pytest.raises(ValidationError) as excinfo:
        notify_all(session, [Team(id=None)], "Subject", "Body", settings=settings, clock=clock)

    assert excinfo.value.field == "recipients"


def test_storage_failure_rolls_back_the_fan_out(
    session, settings, clock, users, monkeypatch: pytest.MonkeyPatch
):
    def failing_commit():
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(session, "commit", failing_commit)

    with pytest.raises(StorageError) as excinfo:
        notify_all(session, users, "Subject", "Body", settings=settings, clock=clock)

    assert isinstance(excinfo.value.__cause__, SQLAlchemyError)
    assert session.query(NotificationModel).count() == 0
    assert session.query(ReceiptModel).count() == 0
