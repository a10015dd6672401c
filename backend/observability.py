"""
Logging estructurado: formateador JSON y configuración al arrancar.

- Todos los logs incluyen timestamp, nivel, logger y mensaje.
- Campos extra de la consulta (page, limit, open_only, search) si vienen.
- JSON en producción, texto legible en desarrollo.
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = ("page", "limit", "open_only", "search", "error_category", "error_info")


class JSONFormatter(logging.Formatter):
    """Formatea cada registro como una línea JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configura el logger raíz. Idempotente: no duplica handlers."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_tenders_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._tenders_handler = True  # type: ignore[attr-defined]
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
