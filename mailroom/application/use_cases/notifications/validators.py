"""Validation helpers shared by notification and message use cases."""

from __future__ import annotations

from typing import Any

from mailroom.config import Settings
from mailroom.domain.entities import Participant, participant_key
from mailroom.domain.errors import ValidationError


def _ensure_text(field: str, value: object, max_length: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "can't be blank")
    if len(value) > max_length:
        raise ValidationError(
            field, f"is too long (maximum is {max_length} characters)"
        )
    return value


def ensure_valid_content(
    subject: str | None, body: str | None, *, settings: Settings
) -> tuple[str, str]:
    """Return ``subject`` and ``body`` or raise ``ValidationError`` for the first bad field."""

    return (
        _ensure_text("subject", subject, settings.subject_max_length),
        _ensure_text("body", body, settings.body_max_length),
    )


def normalize_recipients(recipients: Any) -> list[Any]:
    """Return the distinct recipients in their original order.

    ``recipients`` may be one participant or an iterable of participants;
    duplicates are detected by ``(participant type, id)``.
    """

    if recipients is None:
        raise ValidationError("recipients", "at least one recipient is required")

    candidates = [recipients] if isinstance(recipients, Participant) else list(recipients)

    unique: list[Any] = []
    seen: set[tuple[str, int]] = set()
    for candidate in candidates:
        try:
            key = participant_key(candidate)
        except (AttributeError, TypeError, ValueError) as exc:
            raise ValidationError("recipients", str(exc)) from exc
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate)

    if not unique:
        raise ValidationError("recipients", "at least one recipient is required")
    return unique


__all__ = ["ensure_valid_content", "normalize_recipients"]
