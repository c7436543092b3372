import logging

import streamlit as st

import settings
from _shared_ui import get_api, load_tests, setup_logging, stop_live, system_selector, test_selector, top_bar
from api_client import ApiError
from characterization import CharacterizationParams, fmt, get_grid, grid_to_frame

logger = logging.getLogger(__name__)

st.set_page_config(page_title="Characterization", page_icon="🗺️", layout="wide")
setup_logging()
stop_live()


def init_state():
    # (test, system) -> {life: response or None}, {life: error text}
    st.session_state.setdefault("char_results", {})
    st.session_state.setdefault("char_errors", {})

init_state()

top_bar(page_icon="🗺️", title="Characterization (Voltage drop maps)", home_page_path="Home.py")

api = get_api()
tests = load_tests(api)
params = CharacterizationParams()

st.caption(
    f"12 tables per system: BOL/MID/EOL × {'/'.join(map(str, settings.TEMP_TARGETS))}°C "
    f"(grouped by DATA_TEMPERATURE_SS_CONTACT ±{params.temp_tol}°C). Cell = median voltage drop (V)."
)

c_test, c_sys, c_btn = st.columns([2, 1, 1])
with c_test:
    selected = test_selector(tests, key="char_test")
with c_sys:
    system = system_selector(key="char_system")
    st.caption(f"Voltage uses TENSION{system}, current uses CONS_ALIM_{system}, temps use S{system} sensors.")
with c_btn:
    st.write("")
    reload_clicked = st.button("Reload all", disabled=selected is None, width="stretch")


def load_life(test_id: int, system: int, life: str):
    query = CharacterizationParams(system=system, life=life).to_query()
    try:
        return api.characterization(test_id, query), ""
    except ApiError as exc:
        logger.warning("characterization %s failed for test %s: %s", life, test_id, exc)
        return None, f"❌ {exc}"


def reload_all(test_id: int, system: int) -> None:
    results, errors = {}, {}
    with st.spinner("Loading…"):
        for life in settings.LIFE_STAGES:
            results[life], errors[life] = load_life(test_id, system, life)
    st.session_state.char_results[(test_id, system)] = results
    st.session_state.char_errors[(test_id, system)] = errors


def _display(frame):
    return frame.apply(lambda col: col.map(lambda v: fmt(v) or "—"))


if selected is not None:
    key = (selected, system)
    if reload_clicked or key not in st.session_state.char_results:
        reload_all(selected, system)
    results = st.session_state.char_results.get(key, {})
    errors = st.session_state.char_errors.get(key, {})

    for life, life_title in settings.LIFE_STAGES.items():
        st.subheader(life_title)
        if errors.get(life):
            st.error(errors[life])
        cols = st.columns(2)
        for i, temp in enumerate(settings.TEMP_TARGETS):
            with cols[i % 2]:
                st.markdown(f"**{life.upper()} — Amb ≈ {temp}°C**")
                frame = grid_to_frame(get_grid(results.get(life), temp))
                st.dataframe(_display(frame), width="stretch")
