import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field
from supabase import Client, create_client

# Cargar .env desde la raíz del proyecto (donde se ejecuta uvicorn)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)
# Por si se ejecuta desde otra ruta, intentar también el cwd
load_dotenv()


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("true", "1", "yes")


class Settings(BaseModel):
    """
    Configuración del proceso leída del entorno.

    Se construye una vez y se pasa explícitamente a la app y al cliente Supabase;
    ningún módulo lee credenciales por su cuenta.
    """

    model_config = ConfigDict(frozen=True)

    supabase_url: str | None = Field(None, description="Project URL de Supabase.")
    supabase_key: str | None = Field(None, description="Clave service_role (privilegiada).")
    debug: bool = Field(False, description="Si es True, el handler global expone el detalle del 500.")
    log_level: str = Field("INFO", description="Nivel de logging.")
    log_format: str = Field("text", description="'json' en producción, 'text' en desarrollo.")


def load_settings() -> Settings:
    """Construye Settings desde variables de entorno (.env ya cargado)."""
    return Settings(
        supabase_url=os.environ.get("SUPABASE_URL"),
        # Edge functions usan SUPABASE_SERVICE_ROLE_KEY; se acepta SUPABASE_KEY por compatibilidad
        supabase_key=os.environ.get("SUPABASE_SERVICE_ROLE_KEY") or os.environ.get("SUPABASE_KEY"),
        debug=_env_flag("DEBUG"),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        log_format=os.environ.get("LOG_FORMAT", "text"),
    )


def create_supabase_client(settings: Settings) -> Client:
    """
    Crea el cliente Supabase con la clave de servicio.

    Lanza RuntimeError si faltan credenciales o la URL no es una URL.
    """
    if not settings.supabase_url or not settings.supabase_key:
        raise RuntimeError(
            "Faltan las credenciales de Supabase. En el archivo .env (raíz del proyecto) define:\n"
            "  SUPABASE_URL=https://TU_PROJECT_REF.supabase.co\n"
            "  SUPABASE_SERVICE_ROLE_KEY=eyJhbGciOiJIUzI1NiIsInR5cCI6... (service_role key)\n"
            "Obtén ambos en: Supabase → tu proyecto → Settings → API."
        )
    url = settings.supabase_url.strip()
    if not url.startswith("http://") and not url.startswith("https://"):
        raise RuntimeError(
            "SUPABASE_URL debe ser la URL completa del proyecto, por ejemplo:\n"
            "  https://abcdefgh.supabase.co\n"
            "No uses la clave pública/secret aquí. En Settings → API copia 'Project URL' en SUPABASE_URL."
        )
    return create_client(url, settings.supabase_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings singleton para el proceso (uvicorn / streamlit)."""
    return load_settings()


__all__ = ["Settings", "load_settings", "create_supabase_client", "get_settings"]
