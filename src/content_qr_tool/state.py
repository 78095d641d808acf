"""Runtime state containers used by the Content QR Tool."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .qr import RenderedImage


@dataclass(slots=True)
class AppState:
    """Mutable state shared between UI components."""

    image: Optional[RenderedImage] = None
    render_error: Optional[str] = None
    rendered_generation: int = 0
    qr_available: bool = False

    def clear_image(self) -> None:
        self.image = None
        self.render_error = None


__all__ = ["AppState"]
