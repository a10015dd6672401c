### src/views/error_fallback.py
import json
from typing import Callable, Optional

import streamlit as st
import streamlit.components.v1 as components

from src.logic.error_fallback import BrowserBridge, ErrorFallback, IconKind, report_error
from src.styles import tarjeta_fallback

ICONOS = {
    IconKind.REFRESH: "🔄",
    IconKind.WARNING: "⚠️",
    IconKind.BUG: "🐞",
}

# Clave de session_state donde el boundary guarda el error capturado
CLAVE_ERROR = "error_boundary_error"


def _ejecutar_js(script: str):
    """Inyecta JS en un iframe sin altura. El iframe actúa sobre la ventana padre."""
    components.html(f"<script>{script}</script>", height=0)


def _js_str(valor: str) -> str:
    """Literal JS seguro dentro de <script> (un "</" en el texto cerraría la etiqueta)."""
    return json.dumps(valor).replace("</", "<\\/")


class StreamlitBrowser:
    """BrowserBridge sobre Streamlit: JS inyectado para navegar y cabeceras de st.context."""

    def reload(self) -> None:
        _ejecutar_js("window.parent.location.reload();")

    def navigate(self, href: str) -> None:
        _ejecutar_js(f"window.parent.location.href = {_js_str(href)};")

    def current_url(self) -> str:
        url = getattr(st.context, "url", None)
        if url:
            return url
        host = st.context.headers.get("Host", "localhost")
        return f"http://{host}/"

    def user_agent(self) -> str:
        return st.context.headers.get("User-Agent", "")

    def copy_to_clipboard(self, text: str, copied_notice: str, failed_notice: str) -> None:
        # La promesa de writeText se resuelve en el navegador: el aviso sale de ahí.
        # Sin API de portapapeles (http sin TLS, iframe sin permiso) se rechaza igual.
        _ejecutar_js(
            "const clip = window.parent.navigator.clipboard;"
            f"(clip ? clip.writeText({_js_str(text)}) : Promise.reject(new Error('clipboard unavailable')))"
            f".then(() => window.parent.alert({_js_str(copied_notice)}))"
            f".catch(() => window.parent.alert({_js_str(failed_notice)}));"
        )
        # Copia manual siempre disponible (st.code trae su propio botón de copiar)
        st.code(text, language="json")

    def notify(self, message: str) -> None:
        st.toast(message)


def render_error_fallback(
    error: Optional[BaseException],
    reset: Callable[[], None],
    browser: Optional[BrowserBridge] = None,
):
    """Pantalla que sustituye a la vista que ha fallado."""
    fallback = ErrorFallback(error, reset, browser or StreamlitBrowser())
    config = fallback.config

    tarjeta_fallback(config.color_scheme, ICONOS[config.icon_kind], config.title, config.message)

    _, centro, _ = st.columns([1, 2, 1])
    with centro:
        # --- ACCIÓN PRINCIPAL ---
        if st.button(f"🔄 {config.primary_action_label}", key="fallback_primary", use_container_width=True):
            fallback.refresh()

        # --- ACCIONES SECUNDARIAS ---
        c_home, c_report = st.columns(2)
        with c_home:
            if st.button("🏠 Go Home", key="fallback_home", use_container_width=True):
                fallback.go_home()
        if config.show_technical_details:
            with c_report:
                if st.button("🐞 Report Issue", key="fallback_report", use_container_width=True):
                    fallback.report()

            with st.expander("Show technical details"):
                st.markdown(f"**Error:** {fallback.message}")
                if fallback.stack:
                    st.markdown("**Stack:**")
                    st.code(fallback.stack, language="text")

        st.divider()
        st.caption("If this problem persists, please contact support with the error details above.")


def _reset_boundary():
    """Olvida el error y vuelve a renderizar la vista sin recargar la página."""
    st.session_state.pop(CLAVE_ERROR, None)
    st.rerun()


def run_with_error_boundary(vista: Callable[[], None]):
    """
    Ejecuta una vista; si lanza, registra el error y pinta el fallback.

    El error se guarda en session_state para que el fallback sobreviva a los
    reruns de sus propios botones. st.rerun/st.stop no heredan de Exception
    y siguen su curso.
    """
    error = st.session_state.get(CLAVE_ERROR)
    if error is None:
        try:
            vista()
            return
        except Exception as e:
            report_error(e, {"vista": getattr(vista, "__name__", repr(vista))})
            st.session_state[CLAVE_ERROR] = e
            error = e

    render_error_fallback(error, _reset_boundary)
