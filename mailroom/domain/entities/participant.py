"""Identity helpers for anything that owns a mailbox."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Participant(Protocol):
    """Object with a stable identity that can send or receive mail."""

    id: int | None


def participant_type(participant: Any) -> str:
    """Return the type tag stored alongside ``participant``'s identifier."""

    explicit = getattr(participant, "participant_type", None)
    if explicit:
        return str(explicit)
    return type(participant).__name__.lower()


def participant_key(participant: Any) -> tuple[str, int]:
    """Return the ``(type, id)`` pair identifying ``participant``."""

    identifier = getattr(participant, "id", None)
    if identifier is None:
        msg = f"{type(participant).__name__} must be persisted before receiving mail"
        raise ValueError(msg)
    return participant_type(participant), int(identifier)


__all__ = ["Participant", "participant_key", "participant_type"]
