"""Identifier generation and content type mapping."""

from __future__ import annotations

from uuid import UUID

import pytest

from tempdrop.storage.identifiers import generate_identifier
from tempdrop.storage.media_types import content_type_for_name, extension_for_content_type

pytestmark = pytest.mark.unit


def test_generate_identifier_is_uuid4() -> None:
    identifier = generate_identifier()

    parsed = UUID(identifier)
    assert parsed.version == 4
    assert str(parsed) == identifier


def test_generate_identifier_does_not_repeat() -> None:
    identifiers = {generate_identifier() for _ in range(1_000)}

    assert len(identifiers) == 1_000



@pytest.mark.parametrize(
    ("content_type", "expected"),
    [
        ("text/plain", "txt"),
        ("text/plain; charset=utf-8", "txt"),
        ("IMAGE/PNG", "png"),
        ("application/json", "json"),
        ("application/x-definitely-unknown", "bin"),
        ("", "bin"),
        (None, "bin"),
    ],
)
def test_extension_for_content_type(content_type: str | None, expected: str) -> None:
    assert extension_for_content_type(content_type) == expected


def test_content_type_for_name() -> None:
    assert content_type_for_name("abc.txt") == "text/plain"
    assert content_type_for_name("abc.png") == "image/png"
    assert content_type_for_name("abc.bin") == "application/octet-stream"
    assert content_type_for_name("abc.notatype") is None
    assert content_type_for_name("abc") is None
