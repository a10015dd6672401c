"""
Listado de licitaciones (tabla tenders) con paginación y estadísticas.
Equivalente a la edge function get-tenders.

Cualquier método salvo OPTIONS se trata como lectura. Nunca deja escapar una
excepción: los fallos devuelven 500 con el sobre de error.
"""

import logging

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from backend.deps import get_tender_service
from backend.models import TenderListErrorResponse, TenderQuery
from backend.services.exceptions import DomainError, InvalidQueryError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tenders"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

# Todos los métodos entran por el mismo handler; solo OPTIONS se distingue.
# HEAD no se añade solo en FastAPI: sin él la respuesta sería 405
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _parse_query(request: Request) -> TenderQuery:
    try:
        return TenderQuery.from_query_params(request.query_params)
    except ValueError as e:
        raise InvalidQueryError(f"Parámetros de consulta no válidos: {e!s}") from e


def _error_message(exc: Exception) -> str:
    if isinstance(exc, DomainError):
        return exc.message
    return str(exc) or exc.__class__.__name__


@router.api_route("/tenders", methods=ALL_METHODS)
@router.api_route("/get-tenders", methods=ALL_METHODS)
def get_tenders(request: Request) -> Response:
    """
    Página de licitaciones + estadísticas.

    Query params: page (1), limit (1000), openOnly ("true"), search (opcional).
    """
    if request.method == "OPTIONS":
        return PlainTextResponse("ok", headers=CORS_HEADERS)

    try:
        query = _parse_query(request)
        service = get_tender_service(request)
        result = service.list_tenders(query)
    except Exception as e:
        logger.exception("Error en get-tenders: %s", e)
        body = TenderListErrorResponse(error=_error_message(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(mode="json", by_alias=True),
            headers=CORS_HEADERS,
        )

    return JSONResponse(
        content=result.model_dump(mode="json", by_alias=True),
        headers=CORS_HEADERS,
    )
