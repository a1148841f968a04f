"""Mapping between declared content types and file extensions."""

from __future__ import annotations

import mimetypes

DEFAULT_EXTENSION = "bin"

# Built-in table only; host ``mime.types`` files would make the mapping vary
# between machines.
_TYPES = mimetypes.MimeTypes(filenames=())


def extension_for_content_type(content_type: str | None) -> str:
    """Return the preferred extension for ``content_type`` without the dot."""

    mime = (content_type or "").split(";", 1)[0].strip().lower()
    if not mime:
        return DEFAULT_EXTENSION
    extension = _TYPES.guess_extension(mime, strict=False)
    if not extension:
        return DEFAULT_EXTENSION
    return extension.lstrip(".")


def content_type_for_name(name: str) -> str | None:
    """Infer a MIME type from a stored object's name, ``None`` if unknown."""

    mime, _ = _TYPES.guess_type(name, strict=False)
    return mime


__all__ = ["DEFAULT_EXTENSION", "content_type_for_name", "extension_for_content_type"]
