"""
Repositorio de licitaciones (tabla tenders) y sus RPC de apoyo.

La tabla es pública (sin organization_id): se accede con la clave de servicio.
Métodos de dominio: list_tenders, search_tenders, count_search_results, get_stats.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from supabase import Client

# Límite usado para contar resultados de búsqueda (la RPC no devuelve count)
SEARCH_COUNT_LIMIT = 999999


class TendersRepository:
    """
    Acceso a la tabla tenders.

    No captura errores: las excepciones de postgrest suben al servicio,
    que las envuelve en TenderQueryError.
    """

    TABLE_TENDERS = "tenders"
    RPC_STATS = "get_tender_stats"
    RPC_SEARCH = "search_tenders"

    def __init__(self, client: Client) -> None:
        self._client = client

    def list_tenders(
        self,
        offset: int,
        limit: int,
        open_after: Optional[datetime] = None,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Página de licitaciones ordenada por close_date ascendente (nulos al final).

        Si open_after viene, solo filas con close_date > open_after.
        Devuelve (filas, total) donde total es el count exacto del conjunto filtrado
        sin ventana.
        """
        query = self._client.table(self.TABLE_TENDERS).select("*", count="exact")
        if open_after is not None:
            query = query.gt("close_date", open_after.isoformat())
        response = (
            query
            .order("close_date", desc=False, nullsfirst=False)
            .range(offset, offset + limit - 1)
            .execute()
        )
        return list(response.data or []), int(response.count or 0)

    def search_tenders(self, term: str, offset: int, limit: int) -> List[Dict[str, Any]]:
        """Búsqueda de texto completo vía RPC search_tenders (ya ordenada por rank)."""
        response = self._client.rpc(
            self.RPC_SEARCH,
            {"search_term": term, "limit_count": limit, "offset_count": offset},
        ).execute()
        return list(response.data or [])

    def count_search_results(self, term: str) -> int:
        """Total de resultados de búsqueda: misma RPC sin ventana."""
        return len(self.search_tenders(term, offset=0, limit=SEARCH_COUNT_LIMIT))

    def get_stats(self) -> Optional[Dict[str, Any]]:
        """Primera fila de get_tender_stats, o None si la RPC no devuelve filas."""
        response = self._client.rpc(self.RPC_STATS).execute()
        data = response.data
        if isinstance(data, dict):
            return data
        if not data:
            return None
        return data[0]
