"""
Servicio de licitaciones: lógica de consulta aislada de HTTP.

Recibe TendersRepository por inyección. Lanza excepciones de dominio
(TenderQueryError), no HTTPException. Sin estado entre peticiones.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from backend.models import Pagination, TenderListResponse, TenderQuery, TenderStats
from backend.repositories.tenders_repository import TendersRepository
from backend.services.exceptions import TenderQueryError
from backend.utils import to_iso_timestamp

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TenderService:
    """Listado paginado de licitaciones + estadísticas agregadas."""

    def __init__(
        self,
        repository: TendersRepository,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._repo = repository
        self._clock = clock

    def list_tenders(self, query: TenderQuery) -> TenderListResponse:
        """
        Ejecuta la consulta de filas y después la de estadísticas (secuencial).

        Sin reintentos: el primer fallo corta y sube como TenderQueryError.
        """
        logger.info(
            "Consultando licitaciones",
            extra={"page": query.page, "limit": query.limit, "open_only": query.open_only, "search": query.search},
        )
        if query.search:
            tenders, total = self._search(query)
        else:
            tenders, total = self._fetch_page(query)

        stats = self._get_stats()
        pagination = Pagination.build(page=query.page, limit=query.limit, total=total)

        logger.info(
            "Devueltas %d licitaciones (página %d/%d, total %d)",
            len(tenders), pagination.page, pagination.total_pages, total,
        )
        return TenderListResponse(
            tenders=tenders,
            pagination=pagination,
            stats=stats,
            last_updated=to_iso_timestamp(self._clock()),
        )

    def _fetch_page(self, query: TenderQuery) -> tuple[List[Dict[str, Any]], int]:
        open_after: Optional[datetime] = self._clock() if query.open_only else None
        try:
            return self._repo.list_tenders(offset=query.offset, limit=query.limit, open_after=open_after)
        except Exception as e:
            raise TenderQueryError(f"Database query failed: {e!s}") from e

    def _search(self, query: TenderQuery) -> tuple[List[Dict[str, Any]], int]:
        term = query.search or ""
        try:
            rows = self._repo.search_tenders(term, offset=query.offset, limit=query.limit)
            total = self._repo.count_search_results(term)
        except Exception as e:
            raise TenderQueryError(f"Search failed: {e!s}") from e
        return rows, total

    def _get_stats(self) -> TenderStats:
        """Estadísticas de get_tender_stats; ceros/None si la RPC no devuelve fila."""
        try:
            row = self._repo.get_stats()
        except Exception as e:
            raise TenderQueryError(f"Stats query failed: {e!s}") from e
        if not row:
            return TenderStats()
        return TenderStats.model_validate(row)
