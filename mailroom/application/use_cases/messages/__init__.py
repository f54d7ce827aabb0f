"""Use cases for private messages."""

from .send_message import send_message

__all__ = ["send_message"]
