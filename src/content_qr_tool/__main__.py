"""Launch the Content QR Tool desktop window."""
from __future__ import annotations

import logging

from .config import AppConfig


def main() -> int:
    config = AppConfig()
    logging.basicConfig(level=config.log_level, format=config.log_format)

    from .app import run

    return run(config)


if __name__ == "__main__":  # pragma: no cover - manual launch only
    raise SystemExit(main())
