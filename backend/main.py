import logging
import threading
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from supabase import Client

from backend.config import Settings, create_supabase_client, get_settings
from backend.observability import setup_logging
from backend.routers import tenders

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[Client] = None,
) -> FastAPI:
    """
    Construye la app con configuración explícita.

    client: cliente Supabase ya creado (tests). Si no viene, se crea en la
    primera petición a partir de settings; un fallo de credenciales se devuelve
    como sobre de error del listado.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Tenders API",
        version="1.0.0",
        description="API de consulta de licitaciones (tabla tenders) con paginación y estadísticas.",
    )
    app.state.settings = settings
    app.state.supabase_client_factory = _client_factory(settings, client)

    # Manejador global: en producción no exponer detail del 500; solo si DEBUG=true
    @app.exception_handler(Exception)
    async def global_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Error no controlado: %s", exc)
        detail = str(exc) if settings.debug else "Internal Server Error"
        return JSONResponse(status_code=500, content={"detail": detail})

    # Registro bajo /api: /api/tenders y /api/get-tenders
    app.include_router(tenders.router, prefix="/api")

    @app.get("/")
    def root() -> dict:
        """Health check sencillo para verificar que el backend está levantado."""
        return {"status": "ok"}

    if settings.debug:
        logger.info("Modo desarrollo: DEBUG=true (el 500 global expone el detalle)")

    return app


def _client_factory(settings: Settings, client: Optional[Client]) -> Callable[[], Client]:
    if client is not None:
        return lambda: client

    cache: dict[str, Client] = {}
    lock = threading.Lock()

    def factory() -> Client:
        with lock:
            if "client" not in cache:
                cache["client"] = create_supabase_client(settings)
            return cache["client"]

    return factory


# Instancia para `uvicorn backend.main:app`
app = create_app()


__all__ = ["app", "create_app"]
