"""
Excepciones de dominio para la capa de servicios.

El router las traduce al sobre de error (HTTP 500, success=false).
No dependen de FastAPI.
"""


class DomainError(Exception):
    """Base para errores de negocio."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidQueryError(DomainError):
    """Parámetros de consulta no válidos (page/limit no enteros o < 1)."""


class TenderQueryError(DomainError):
    """Fallo de la base de datos o de una RPC al consultar licitaciones."""
