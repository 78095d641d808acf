"""Application icon helpers."""
from __future__ import annotations


def create_icon(size: int = 64):  # pragma: no cover - requires PyQt at runtime
    """Create a :class:`~PyQt5.QtGui.QIcon` showing three QR finder patterns.

    The import is performed lazily so that automated tests do not require a
    graphical backend.
    """

    try:
        from PyQt5.QtGui import QBrush, QColor, QIcon, QPainter, QPixmap
        from PyQt5.QtCore import Qt
    except Exception as exc:  # pragma: no cover - depends on environment
        raise RuntimeError("PyQt5 is required to generate the application icon") from exc

    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.white)

    unit = size // 8
    dark = QBrush(QColor("#0f172a"))
    light = QBrush(QColor("#ffffff"))
    accent = QBrush(QColor("#22d3ee"))

    painter = QPainter(pixmap)
    painter.setPen(Qt.NoPen)
    for x, y in ((0, 0), (size - 3 * unit, 0), (0, size - 3 * unit)):
        painter.setBrush(dark)
        painter.drawRect(x, y, 3 * unit, 3 * unit)
        painter.setBrush(light)
        painter.drawRect(x + unit // 2, y + unit // 2, 2 * unit, 2 * unit)
        painter.setBrush(dark)
        painter.drawRect(x + unit, y + unit, unit, unit)

    painter.setBrush(accent)
    painter.drawRect(size - 3 * unit, size - 3 * unit, 2 * unit, 2 * unit)
    painter.end()

    return QIcon(pixmap)


__all__ = ["create_icon"]
