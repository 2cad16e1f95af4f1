"""Configuración de logging.

- Consola con `rich` (mismo stack que la CLI).
- `app.log` (INFO+) y `error.log` (ERROR+) en `settings.log_dir`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.logging import RichHandler

from core.config import AppSettings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_MARKER = "_forkfinder_handler"


def _tag(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _MARKER, True)
    return handler


def configure_logging(settings: AppSettings | None = None) -> logging.Logger:
    """Instala los handlers del proyecto en el logger raíz (idempotente)."""

    settings = settings or AppSettings()
    root = logging.getLogger()
    root.setLevel(settings.log_level.upper())

    for handler in [h for h in root.handlers if getattr(h, _MARKER, False)]:
        root.removeHandler(handler)
        handler.close()

    console = RichHandler(rich_tracebacks=True, show_path=False)
    console.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(_tag(console))

    if settings.log_dir:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        formatter = logging.Formatter(LOG_FORMAT)

        app_file = logging.FileHandler(log_dir / "app.log", encoding="utf-8")
        app_file.setLevel(logging.INFO)
        app_file.setFormatter(formatter)
        root.addHandler(_tag(app_file))

        error_file = logging.FileHandler(log_dir / "error.log", encoding="utf-8")
        error_file.setLevel(logging.ERROR)
        error_file.setFormatter(formatter)
        root.addHandler(_tag(error_file))

    return root
