"""Stream primitives: Subject, Subscription and the read-only Stream view."""

from pushbridge.stream.subject import Subject, Subscription
from pushbridge.stream.view import Stream

__all__ = ["Stream", "Subject", "Subscription"]
