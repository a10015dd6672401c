"""
Clasificación de errores y configuración de la pantalla de fallback.

Sin dependencias de Streamlit: los efectos del navegador (recargar, navegar,
portapapeles, avisos) pasan por un BrowserBridge que inyecta la vista.
"""

import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field

from backend.utils import to_iso_timestamp

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"
HOME_PATH = "/"

COPY_OK_NOTICE = "Error details copied to clipboard"
COPY_FAILED_NOTICE = "Unable to copy error details"

# Orden de evaluación: la primera regla que coincide gana
CHUNK_ERROR_MARKERS = ("Loading chunk", "ChunkLoadError")
NETWORK_ERROR_MARKERS = ("fetch", "network")


class ErrorCategory(str, Enum):
    CHUNK_UPDATE = "chunk_update"
    NETWORK_PROBLEM = "network_problem"
    GENERIC_FAILURE = "generic_failure"


class IconKind(str, Enum):
    REFRESH = "refresh"
    WARNING = "warning"
    BUG = "bug"


class ColorScheme(str, Enum):
    BLUE = "blue"
    AMBER = "amber"
    RED = "red"


class ErrorPresentationConfig(BaseModel):
    """Qué se muestra para una categoría de error. Se resuelve una vez por render."""

    model_config = ConfigDict(frozen=True)

    title: str
    message: str
    icon_kind: IconKind
    primary_action_label: str
    show_technical_details: bool
    color_scheme: ColorScheme


ERROR_CONFIGS: Dict[ErrorCategory, ErrorPresentationConfig] = {
    ErrorCategory.CHUNK_UPDATE: ErrorPresentationConfig(
        title="App Update Available",
        message="A new version of the app is available. Please refresh to get the latest updates.",
        icon_kind=IconKind.REFRESH,
        primary_action_label="Refresh Page",
        show_technical_details=False,
        color_scheme=ColorScheme.BLUE,
    ),
    ErrorCategory.NETWORK_PROBLEM: ErrorPresentationConfig(
        title="Connection Problem",
        message="Unable to connect to our servers. Please check your internet connection and try again.",
        icon_kind=IconKind.WARNING,
        primary_action_label="Try Again",
        show_technical_details=False,
        color_scheme=ColorScheme.AMBER,
    ),
    ErrorCategory.GENERIC_FAILURE: ErrorPresentationConfig(
        title="Something Went Wrong",
        message=(
            "An unexpected error occurred while loading the page. "
            "Our team has been notified and is working on a fix."
        ),
        icon_kind=IconKind.BUG,
        primary_action_label="Try Again",
        show_technical_details=True,
        color_scheme=ColorScheme.RED,
    ),
}


def classify_error(message: str) -> ErrorCategory:
    """Categoría por subcadena (sensible a mayúsculas). Nunca falla."""
    if any(marker in message for marker in CHUNK_ERROR_MARKERS):
        return ErrorCategory.CHUNK_UPDATE
    if any(marker in message for marker in NETWORK_ERROR_MARKERS):
        return ErrorCategory.NETWORK_PROBLEM
    return ErrorCategory.GENERIC_FAILURE


def get_error_config(category: ErrorCategory) -> ErrorPresentationConfig:
    return ERROR_CONFIGS[category]


def error_message(error: Optional[BaseException]) -> str:
    """Texto del error, o el mensaje genérico si está vacío."""
    if error is None:
        return DEFAULT_ERROR_MESSAGE
    return str(error) or DEFAULT_ERROR_MESSAGE


def error_stack(error: Optional[BaseException]) -> Optional[str]:
    """Traceback formateado si el error se llegó a lanzar; None si no."""
    if error is None or error.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


class BrowserBridge(Protocol):
    """Efectos del navegador que necesita el fallback."""

    def reload(self) -> None: ...

    def navigate(self, href: str) -> None: ...

    def current_url(self) -> str: ...

    def user_agent(self) -> str: ...

    def copy_to_clipboard(self, text: str, copied_notice: str, failed_notice: str) -> None:
        """
        Copia text y muestra copied_notice o failed_notice según el resultado real
        de la copia, que puede llegar después (portapapeles asíncrono del navegador).
        Lanza una excepción si la copia no se puede ni iniciar.
        """
        ...

    def notify(self, message: str) -> None: ...


class ErrorReport(BaseModel):
    """Informe copiable del error (mismas claves que el informe del frontend web)."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    stack: Optional[str] = None
    url: str
    user_agent: str = Field(..., alias="userAgent")
    timestamp: str

    def to_json(self) -> str:
        """JSON indentado; stack se omite si no hay."""
        return self.model_dump_json(indent=2, by_alias=True, exclude_none=True)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ErrorFallback:
    """
    Pantalla de fallback para un error capturado por el boundary.

    Recibe el error y el reset del boundary; no guarda más estado.
    Las acciones (refresh, go_home, report) solo se ejecutan cuando la vista las invoca.
    """

    def __init__(
        self,
        error: Optional[BaseException],
        reset: Callable[[], None],
        browser: BrowserBridge,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.error = error
        self.message = error_message(error)
        self.stack = error_stack(error)
        self.category = classify_error(self.message)
        self.config = get_error_config(self.category)
        self._reset = reset
        self._browser = browser
        self._clock = clock

    def refresh(self) -> None:
        """Chunk: recarga completa (nuevo código). Resto: reintenta con el reset del boundary."""
        if self.category == ErrorCategory.CHUNK_UPDATE:
            self._browser.reload()
        else:
            self._reset()

    def go_home(self) -> None:
        """Navegación completa a la raíz; no depende del enrutado interno de la app."""
        self._browser.navigate(HOME_PATH)

    def build_report(self) -> ErrorReport:
        return ErrorReport(
            message=self.message,
            stack=self.stack,
            url=self._browser.current_url(),
            user_agent=self._browser.user_agent(),
            timestamp=to_iso_timestamp(self._clock()),
        )

    def report(self) -> bool:
        """
        Copia el informe al portapapeles; el aviso de éxito o fallo lo da el navegador
        cuando termina la copia. Devuelve False si la copia no se pudo iniciar
        (en ese caso el aviso de fallo se da aquí). Nunca propaga el error.
        """
        payload = self.build_report().to_json()
        logger.info("Error Report: %s", payload)
        try:
            self._browser.copy_to_clipboard(payload, COPY_OK_NOTICE, COPY_FAILED_NOTICE)
        except Exception as e:
            logger.warning("No se pudo copiar el informe de error: %s", e)
            self._browser.notify(COPY_FAILED_NOTICE)
            return False
        return True


def report_error(error: BaseException, error_info: Optional[Dict[str, Any]] = None) -> None:
    """Registra un error capturado con contexto opcional (p. ej. la vista que falló)."""
    message = error_message(error)
    logger.error(
        "Error reported: %s",
        message,
        exc_info=(type(error), error, error.__traceback__),
        extra={"error_category": classify_error(message).value, "error_info": error_info},
    )
