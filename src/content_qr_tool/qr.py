"""QR code rendering utilities."""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path

from .config import AppConfig
from .content import ErrorCorrection, coerce_error_correction, coerce_size

logger = logging.getLogger(__name__)


class RenderError(RuntimeError):
    """Raised when a payload cannot be turned into a QR image."""


class PayloadTooLargeError(RenderError):
    """Raised when the payload exceeds the capacity of a QR symbol."""


@dataclass(frozen=True, slots=True)
class RenderedImage:
    """A rendered QR code together with the inputs that produced it."""

    png: bytes
    payload: str
    error_correction: ErrorCorrection
    size: int


@dataclass(slots=True)
class QRCodeManager:
    """Render QR codes using :mod:`segno` and resize them with Pillow."""

    config: AppConfig

    def is_available(self) -> bool:
        try:
            import segno  # type: ignore  # noqa: F401
        except Exception:
            return False
        return True

    def _make(self, payload: str, error_correction: ErrorCorrection):
        try:
            import segno  # type: ignore
        except Exception as exc:  # pragma: no cover - depends on environment
            raise RenderError("QR generation requires segno; install segno") from exc

        try:
            return segno.make(
                payload,
                error=error_correction.value,
                micro=False,
                boost_error=False,
            )
        except segno.DataOverflowError as exc:
            raise PayloadTooLargeError("Payload too large for selected settings") from exc

    def render(
        self,
        payload: str,
        error_correction: ErrorCorrection | str,
        size: int,
    ) -> RenderedImage:
        """Return a ``size`` x ``size`` PNG encoding ``payload``.

        The symbol is drawn by segno at the largest whole-module scale that
        fits and then scaled to the exact requested width with nearest
        neighbour sampling so the modules stay sharp.
        """

        level = coerce_error_correction(error_correction)
        size = coerce_size(size)

        try:
            from PIL import Image
        except Exception as exc:  # pragma: no cover - depends on environment
            raise RenderError("QR generation requires Pillow") from exc

        qr = self._make(payload, level)
        border = self.config.qr_border
        width, _height = qr.symbol_size(scale=1, border=border)
        scale = max(1, size // width)

        buffer = io.BytesIO()
        qr.save(
            buffer,
            kind="png",
            scale=scale,
            border=border,
            dark=self.config.qr_dark,
            light=self.config.qr_light,
        )
        buffer.seek(0)

        try:
            with Image.open(buffer) as source:
                image = source.convert("RGB")
        except OSError as exc:
            raise RenderError("Failed to load rendered QR image") from exc

        if image.size != (size, size):
            image = image.resize((size, size), Image.Resampling.NEAREST)

        output = io.BytesIO()
        image.save(output, format="PNG")
        logger.debug("Rendered %d character payload at %s/%dpx", len(payload), level.value, size)

        return RenderedImage(
            png=output.getvalue(),
            payload=payload,
            error_correction=level,
            size=size,
        )

    def save_png(self, image: RenderedImage, path: str | Path) -> Path:
        """Write ``image`` to ``path`` and return the resolved path."""

        target = Path(path)
        target.write_bytes(image.png)
        logger.info("Saved %dpx QR code to %s", image.size, target)
        return target

    def to_qpixmap(self, image: RenderedImage):  # pragma: no cover - requires PyQt at runtime
        """Return a ``QPixmap`` for ``image``.

        The method imports :mod:`PyQt5` lazily to keep the module usable in
        headless test environments.
        """

        try:
            from PyQt5.QtGui import QImage, QPixmap
        except Exception as exc:  # pragma: no cover - depends on environment
            raise RenderError("PyQt5 is required to generate a preview pixmap") from exc

        qimage = QImage()
        if not qimage.loadFromData(image.png):
            raise RenderError("Failed to load QR image into QImage")

        return QPixmap.fromImage(qimage)


__all__ = ["PayloadTooLargeError", "QRCodeManager", "RenderError", "RenderedImage"]
