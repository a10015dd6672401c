import math
import re
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

# Valores por defecto de la paginación (también usados en la respuesta de error)
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 1000

# Solo dígitos ASCII: int() aceptaría "+5", "1_0" o " 7"
_DIGITS = re.compile(r"[0-9]+")


def _parse_int(name: str, raw: str, default: int) -> int:
    if not raw:
        return default
    if not _DIGITS.fullmatch(raw):
        raise ValueError(f"{name} must be a positive integer, got {raw!r}")
    return int(raw)


# ----- Petición -----


class TenderQuery(BaseModel):
    """
    Parámetros de consulta de licitaciones (tabla tenders).

    page y limit son enteros positivos; offset se deriva de ambos.
    search es opcional: si viene con texto se usa la RPC search_tenders.
    """

    model_config = ConfigDict(frozen=True)

    page: int = Field(DEFAULT_PAGE, ge=1, description="Página (1-based).")
    limit: int = Field(DEFAULT_LIMIT, ge=1, description="Tamaño de página.")
    open_only: bool = Field(False, description="Solo licitaciones con close_date futura.")
    search: Optional[str] = Field(None, description="Texto de búsqueda (RPC search_tenders).")

    @property
    def offset(self) -> int:
        """Primera fila de la ventana: (page - 1) * limit."""
        return (self.page - 1) * self.limit

    @property
    def range_end(self) -> int:
        """Última fila (inclusive) de la ventana."""
        return self.offset + self.limit - 1

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "TenderQuery":
        """
        Construye la consulta desde el query string.

        Valores vacíos -> valor por defecto. openOnly solo es True con "true".
        Lanza ValueError (o ValidationError) si page/limit no son enteros >= 1.
        """
        page_raw = (params.get("page") or "").strip()
        limit_raw = (params.get("limit") or "").strip()
        search_raw = (params.get("search") or "").strip()
        return cls(
            page=_parse_int("page", page_raw, DEFAULT_PAGE),
            limit=_parse_int("limit", limit_raw, DEFAULT_LIMIT),
            open_only=params.get("openOnly") == "true",
            search=search_raw or None,
        )


# ----- Respuesta -----


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    total: int = 0
    total_pages: int = Field(0, alias="totalPages")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        """totalPages = ceil(total / limit); 0 si no hay filas."""
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit))


class TenderStats(BaseModel):
    """Fila de la RPC get_tender_stats. Columnas extra se ignoran."""

    total_tenders: int = 0
    open_tenders: int = 0
    closing_soon: int = 0
    last_updated: Optional[str] = None


class TenderListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    tenders: List[Dict[str, Any]] = Field(default_factory=list)
    pagination: Pagination
    stats: TenderStats = Field(default_factory=TenderStats)
    last_updated: str = Field(..., alias="lastUpdated")


class TenderListErrorResponse(BaseModel):
    """Sobre de error: sin filas, paginación y stats a cero, mensaje del error."""

    success: bool = False
    error: str
    tenders: List[Dict[str, Any]] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)
    stats: TenderStats = Field(default_factory=TenderStats)
