"""Mailroom package initializer.

In-application mailboxes: notifications, private messages and the
per-recipient receipts that track read and expiry state.
"""
