### main.py
import streamlit as st

from src.config import init_connection
from src.styles import cargar_estilo
from src.views import tenders_list
from src.views.error_fallback import run_with_error_boundary

# 1. Configuración Pagina
st.set_page_config(page_title="Tenders", page_icon="📂", layout="wide")

# 2. Estilos
cargar_estilo()


# 3. Vista principal dentro del error boundary (la conexión también: si falla, fallback)
def vista_principal():
    supabase = init_connection()
    tenders_list.render_listado(supabase)


run_with_error_boundary(vista_principal)
