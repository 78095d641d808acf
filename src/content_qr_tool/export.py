"""Export helpers for rendered QR codes."""
from __future__ import annotations

from pathlib import Path

from .content import ContentKind


def export_filename(kind: ContentKind | str, prefix: str = "qr-code") -> str:
    """Return the default download name, e.g. ``qr-code-wifi.png``."""

    return f"{prefix}-{ContentKind(kind).value}.png"


def export_path(
    directory: str | Path,
    kind: ContentKind | str,
    prefix: str = "qr-code",
) -> Path:
    """Return the default export location for ``kind`` inside ``directory``."""

    return Path(directory) / export_filename(kind, prefix)


__all__ = ["export_filename", "export_path"]
