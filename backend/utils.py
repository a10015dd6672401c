"""
Utilidades compartidas para el backend y el frontend Streamlit.
Formateo de fechas y números sin dependencias de Streamlit.
"""

from datetime import date, datetime, timezone
from typing import Any, Union


def to_iso_timestamp(valor: datetime) -> str:
    """
    ISO-8601 en UTC con milisegundos y sufijo Z (mismo formato que Date.toISOString).
    Ejemplo: 2025-06-29T10:59:33.123Z
    """
    if valor.tzinfo is None:
        valor = valor.replace(tzinfo=timezone.utc)
    return valor.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def fmt_num(valor: Any) -> str:
    """Entero con separador de miles (1.234). Vacío o no numérico -> "0"."""
    if valor is None or str(valor).strip() == "":
        return "0"
    try:
        return f"{int(valor):,}".replace(",", ".")
    except (ValueError, TypeError):
        return "0"


def fmt_date(valor: Union[str, date, datetime, None]) -> str:
    """
    Fecha en formato DD/MM/YYYY.

    Acepta date/datetime o texto que empiece por YYYY-MM-DD (fecha ISO, con o sin
    hora). Cualquier otro texto se devuelve tal cual; None o "" dan "".
    """
    if valor is None or valor == "":
        return ""
    if isinstance(valor, str):
        try:
            valor = date.fromisoformat(valor[:10])
        except ValueError:
            return valor
    if isinstance(valor, date):
        return f"{valor.day:02d}/{valor.month:02d}/{valor.year:04d}"
    return str(valor)
