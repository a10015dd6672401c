"""
Repositorios de acceso a Supabase.

Reciben el cliente por inyección; no crean conexiones propias.
"""

from backend.repositories.tenders_repository import TendersRepository

__all__ = ["TendersRepository"]
