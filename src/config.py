import streamlit as st
from supabase import Client

from backend.config import create_supabase_client, get_settings
from backend.observability import setup_logging


@st.cache_resource
def init_connection() -> Client:
    """Inicializa la conexión a Supabase de forma Singleton."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    return create_supabase_client(settings)
