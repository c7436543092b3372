# _shared_ui.py
import logging
from typing import List, Optional

import streamlit as st

import settings
from api_client import ApiError, BenchApi, TestRun


def setup_logging() -> None:
    # no-op once the root logger has handlers
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def stop_live() -> None:
    """Leaving the live page ends the live session."""
    poller = st.session_state.get("live_poller")
    if poller is not None:
        poller.stop()


def top_bar(page_icon: str, title: str, home_page_path: str = "Home.py"):
    """
    Renders a top bar with:
      - a small home icon button (left) that routes to Home
      - the page icon + title
    """
    col_home, col_title, col_spacer = st.columns([0.12, 1.0, 0.05])
    with col_home:
        if st.button("🏠", key="go_home_btn", help="Go to Home", type="secondary"):
            st.switch_page(home_page_path)

    with col_title:
        st.title(f"{page_icon} {title}")


def get_api() -> BenchApi:
    """One client per browser session (keeps the HTTP connection pool)."""
    if "api" not in st.session_state:
        st.session_state.api = BenchApi()
    return st.session_state.api


def load_tests(api: BenchApi) -> List[TestRun]:
    try:
        return api.list_tests()
    except ApiError as exc:
        st.error(f"❌ Backend not reachable: {exc}")
        return []


def test_selector(tests: List[TestRun], *, key: str, disabled: bool = False,
                  preferred_id: Optional[int] = None) -> Optional[int]:
    if not tests:
        st.selectbox("Test", ["—"], disabled=True, key=f"{key}_empty")
        return None
    ids = [t.id for t in tests]
    names = {t.id: t.name for t in tests}
    if preferred_id in ids and st.session_state.get(key) != preferred_id:
        st.session_state[key] = preferred_id
    return st.selectbox("Test", ids, format_func=lambda i: names[i], key=key, disabled=disabled)


def system_selector(*, key: str, disabled: bool = False, label: str = "System") -> int:
    return st.selectbox(label, list(settings.SYSTEMS), format_func=lambda s: f"{label} {s}",
                        key=key, disabled=disabled)
