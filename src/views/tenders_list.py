### src/views/tenders_list.py
import streamlit as st

from backend.models import TenderQuery, TenderStats
from backend.repositories.tenders_repository import TendersRepository
from backend.services.tenders_service import TenderService
from backend.utils import fmt_date, fmt_num

LIMITE_POR_PAGINA = 50


def render_stats_summary(stats: TenderStats):
    """Sub-componente de UI para las tarjetas de estadísticas."""
    k1, k2, k3, k4 = st.columns(4)

    with k1:
        st.metric(label="Total Tenders", value=fmt_num(stats.total_tenders))
    with k2:
        st.metric(label="Open Tenders", value=fmt_num(stats.open_tenders))
    with k3:
        st.metric(
            label="Closing Soon",
            value=fmt_num(stats.closing_soon),
            help="Abiertas que cierran en los próximos 7 días.",
        )
    with k4:
        st.metric(label="Last Updated", value=fmt_date(stats.last_updated) or "-")

    st.divider()


def render_listado(client):
    # Contenedor único para aislar el renderizado
    with st.container():
        st.title("📂 Tenders")

        # --- 1. FILTROS ---
        c_busq, c_abiertas, c_pag = st.columns([4, 2, 1])
        with c_busq:
            busqueda = st.text_input("🔍 Search:", "")
        with c_abiertas:
            solo_abiertas = st.checkbox("Open tenders only", value=True)
        with c_pag:
            pagina = st.number_input("Page", min_value=1, value=1, step=1)

        # --- 2. CONSULTA ---
        # Los errores suben al error boundary de main.py
        service = TenderService(TendersRepository(client))
        resultado = service.list_tenders(
            TenderQuery(
                page=int(pagina),
                limit=LIMITE_POR_PAGINA,
                open_only=solo_abiertas,
                search=busqueda.strip() or None,
            )
        )

        render_stats_summary(resultado.stats)

        # --- 3. LISTADO ---
        pag = resultado.pagination
        st.caption(f"Página {pag.page} de {max(pag.total_pages, 1)} · {fmt_num(pag.total)} resultados")

        if not resultado.tenders:
            st.info("No tenders found.")
            return

        c1, c2, c3, c4 = st.columns([3, 2, 2, 1])
        c1.markdown("**Title**")
        c2.markdown("**Buyer**")
        c3.markdown("**Closes**")
        c4.markdown("**Views**")
        st.markdown("---")

        for tender in resultado.tenders:
            c1, c2, c3, c4 = st.columns([3, 2, 2, 1])
            c1.write(f"*{tender.get('title') or '-'}*")
            c2.write(tender.get("buyer") or "-")
            c3.write(fmt_date(tender.get("close_date")) or "-")
            c4.write(fmt_num(tender.get("view_count")))
