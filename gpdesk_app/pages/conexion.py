"""Connection setup page: collect Supabase credentials and initialize ProjectService."""

from __future__ import annotations

import logging

import streamlit as st

from gpdesk_app.app import register_page
from gpdesk_app.core.config import PROVIDER_CACHE_TTL_SECONDS, SECRETS_SECTION
from gpdesk_app.core.service import ProjectService
from gpdesk_app.core.session import DashboardSession
from gpdesk_app.core.supabase_client import SupabaseProvider

logger = logging.getLogger(__name__)


@register_page("Conexión")
def connection_page(session: DashboardSession):
    st.title("Conexión con Supabase")
    st.caption("Introduce las credenciales (usa st.secrets en producción).")

    secrets = st.secrets.get(SECRETS_SECTION, {})
    secret_url = secrets.get("SUPABASE_URL") or st.secrets.get("SUPABASE_URL")
    secret_key = secrets.get("SUPABASE_KEY") or st.secrets.get("SUPABASE_KEY")

    url = st.text_input("URL del proyecto", value=st.session_state.get("supabase_url") or secret_url or "")
    key = st.text_input("Clave API (anon)", type="password", value=secret_key or "")
    ttl = st.number_input(
        "TTL de la caché (segundos)",
        min_value=0,
        max_value=3600,
        value=int(PROVIDER_CACHE_TTL_SECONDS),
    )
    init_btn = st.button("Conectar", type="primary")

    if init_btn:
        if not (url and key):
            st.error("La URL y la clave son obligatorias.")
            return
        try:
            provider = SupabaseProvider(url, key, cache_ttl=float(ttl))
            session.service = ProjectService(provider)
            session.clear_selection()
            st.session_state["supabase_url"] = url
            st.success("Conexión inicializada.")
        except Exception as e:  # pragma: no cover
            logger.error("Failed to initialize Supabase client: %s", e)
            st.error(f"No se pudo inicializar el cliente: {e}")

    if session.ready:
        st.info("Servicio de proyectos listo.")
