"""Identifier generation for new entities."""

import uuid


def generate_id() -> str:
    """Return a new process-unique identifier string (32 hex characters)."""
    return uuid.uuid4().hex
