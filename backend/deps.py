"""
Dependencias de la API.

El cliente Supabase vive en app.state (lo fija create_app); aquí se construyen
repositorio y servicio por petición, sin estado compartido entre peticiones.
"""

from fastapi import Request

from backend.repositories.tenders_repository import TendersRepository
from backend.services.tenders_service import TenderService


def get_tender_service(request: Request) -> TenderService:
    """
    Servicio de licitaciones para esta petición.

    Se llama dentro del try del router (no vía Depends) para que un fallo al
    obtener el cliente también acabe en el sobre de error JSON.
    """
    client = request.app.state.supabase_client_factory()
    return TenderService(TendersRepository(client))


__all__ = ["get_tender_service"]
