"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``gpdesk_app/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from gpdesk_app.app import get_session, main
from gpdesk_app.core.config import SECRETS_SECTION

st.set_page_config(page_title="GPDesk Analytics", layout="wide")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("gpdesk_app")


def _auto_init_service():
    """Initialize the project service from Streamlit secrets if available."""
    session = get_session()
    if session.ready:
        return

    secrets = st.secrets.get(SECRETS_SECTION, {})
    url = secrets.get("SUPABASE_URL") or st.secrets.get("SUPABASE_URL")
    key = secrets.get("SUPABASE_KEY") or st.secrets.get("SUPABASE_KEY")

    if url and key:
        try:
            from gpdesk_app.core.service import ProjectService
            from gpdesk_app.core.supabase_client import SupabaseProvider

            session.service = ProjectService(SupabaseProvider(url, key))
            st.session_state["supabase_url"] = url
        except Exception as e:
            logger.error("Supabase connection failed: %s", e)
            st.sidebar.error(f"No se pudo conectar con Supabase: {e}")
            session.service = None
    else:
        st.sidebar.warning("No se encontraron credenciales de Supabase. Usa la página Conexión.")


_auto_init_service()

PAGES_DIR = Path(__file__).parent / "gpdesk_app" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"gpdesk_app.pages.{py.stem}"
    try:
        import_module(mod_name)
    except Exception as e:  # pragma: no cover - defensive
        logger.error("Failed importing page %s: %s", mod_name, e)

if __name__ == "__main__":
    main()
