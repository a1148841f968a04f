"""Identifier generation for stored objects."""

from __future__ import annotations

from uuid import uuid4


def generate_identifier() -> str:
    """Return a random version 4 UUID rendered in its hyphenated form."""

    return str(uuid4())


__all__ = ["generate_identifier"]
