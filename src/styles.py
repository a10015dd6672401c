import streamlit as st

from src.logic.error_fallback import ColorScheme

# Paleta de la tarjeta de fallback: (fondo, icono/texto, borde)
PALETA_FALLBACK = {
    ColorScheme.BLUE: ("#EFF6FF", "#2563EB", "#BFDBFE"),
    ColorScheme.AMBER: ("#FFFBEB", "#D97706", "#FDE68A"),
    ColorScheme.RED: ("#FEF2F2", "#DC2626", "#FECACA"),
}


def cargar_estilo():
    """Aplica los estilos CSS generales de la app."""

    estilo = """
    <style>
        .stApp {
            background-color: #F9FAFB;
            color: #111827;
        }
        div.stButton > button {
            border-radius: 8px !important;
            font-weight: 500 !important;
        }
        .fallback-card {
            max-width: 32rem;
            margin: 3rem auto 1.5rem auto;
            padding: 2rem;
            border-radius: 12px;
            text-align: center;
            box-shadow: 0 10px 15px -3px rgba(0, 0, 0, 0.1);
        }
        .fallback-card h1 {
            font-size: 1.5rem;
            color: #111827;
        }
        .fallback-card p {
            color: #4B5563;
            line-height: 1.6;
        }
        .fallback-icon {
            font-size: 2rem;
            width: 4rem;
            height: 4rem;
            line-height: 4rem;
            margin: 0 auto 1.5rem auto;
            border-radius: 9999px;
        }
    </style>
    """
    st.markdown(estilo, unsafe_allow_html=True)


def tarjeta_fallback(color_scheme: ColorScheme, icono: str, titulo: str, mensaje: str):
    """Tarjeta HTML del fallback con los colores de su categoría."""
    fondo, color_icono, borde = PALETA_FALLBACK[color_scheme]
    html = f"""
    <div class="fallback-card" style="background-color: {fondo}; border: 1px solid {borde};">
        <div class="fallback-icon" style="background-color: {fondo}; border: 2px solid {borde}; color: {color_icono};">{icono}</div>
        <h1>{titulo}</h1>
        <p>{mensaje}</p>
    </div>
    """
    st.markdown(html, unsafe_allow_html=True)
