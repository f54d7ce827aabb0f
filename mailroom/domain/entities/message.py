"""Domain entity representing a private message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .notification import KIND_MESSAGE, Notification


@dataclass
class Message(Notification):
    """Mail written by one participant to others.

    Messages share the notification table and lifecycle; the ``kind`` tag keeps
    them out of the notification views.
    """

    kind: ClassVar[str] = KIND_MESSAGE


__all__ = ["Message"]
