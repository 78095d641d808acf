"""Configuration data structures for the Content QR Tool."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(slots=True)
class AppConfig:
    """Static configuration options used across the application."""

    app_name: str = "ContentQRTool"
    app_version: str = "1.0"
    qr_error_correction: str = "M"
    qr_size: int = 256
    qr_size_choices: Tuple[int, ...] = field(default=(128, 256, 512, 1024))
    qr_border: int = 2
    qr_dark: str = "#0f172a"
    qr_light: str = "#ffffff"
    export_prefix: str = "qr-code"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(slots=True)
class StyleConfig:
    """Simple grouping of UI styling constants."""

    bg_primary: str = "#0f172a"
    bg_secondary: str = "#1e293b"
    bg_tertiary: str = "#334155"
    fg_primary: str = "#cbd5e1"
    fg_secondary: str = "#f8fafc"
    accent_primary: str = "#22d3ee"
    accent_secondary: str = "#a855f7"
    warning: str = "#f87171"
    border: str = "#475569"
    font_family: str = "Segoe UI, sans-serif"
    font_size: int = 14
    font_mono: str = "Courier New, monospace"


__all__ = ["AppConfig", "StyleConfig"]
