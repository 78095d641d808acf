"""Content QR Tool package."""
from __future__ import annotations

from .config import AppConfig, StyleConfig
from .content import (
    ContentKind,
    ContentModel,
    ContentRecord,
    ErrorCorrection,
    RenderSettings,
    WifiSecurity,
)
from .encoder import encode, encode_content, is_ready
from .export import export_filename
from .qr import PayloadTooLargeError, QRCodeManager, RenderError, RenderedImage
from .render import RenderOrchestrator, RenderRequest
from .state import AppState

__all__ = [
    "AppConfig",
    "StyleConfig",
    "AppState",
    "ContentKind",
    "ContentModel",
    "ContentRecord",
    "ErrorCorrection",
    "RenderSettings",
    "WifiSecurity",
    "encode",
    "encode_content",
    "is_ready",
    "export_filename",
    "QRCodeManager",
    "RenderedImage",
    "RenderError",
    "PayloadTooLargeError",
    "RenderOrchestrator",
    "RenderRequest",
]

__version__ = "1.0"
