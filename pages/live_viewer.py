import streamlit as st
from streamlit_autorefresh import st_autorefresh

from _shared_ui import get_api, load_tests, setup_logging, system_selector, test_selector, top_bar
from LivePoller import LivePoller
from Sample import to_frame
from charts import LIVE_CHARTS, render_chart, summarize

st.set_page_config(page_title="Live Test Viewer", page_icon="🔴", layout="wide")
setup_logging()


# --- Session state init (call this FIRST) ---
def init_state():
    if "live_poller" not in st.session_state:
        st.session_state.live_poller = LivePoller(get_api().live_series)
    st.session_state.setdefault("live_tests", [])

init_state()
poller: LivePoller = st.session_state.live_poller

top_bar(page_icon="🔴", title="Live Test Viewer", home_page_path="Home.py")

# selectors are locked while live, so the list is only refreshed when idle
if not poller.armed or not st.session_state.live_tests:
    st.session_state.live_tests = load_tests(get_api())
tests = st.session_state.live_tests


def _start():
    poller.start()


def _stop():
    poller.stop()


# --------------------------
# Control bar
# --------------------------
c_test, c_sys, c_start, c_stop, c_status = st.columns([2, 1, 1, 1, 2])
with c_test:
    test_id = test_selector(tests, key="live_test", disabled=poller.armed)
with c_sys:
    system = system_selector(key="live_system", disabled=poller.armed)

if not poller.armed:
    poller.select(test_id, system)

with c_start:
    st.write("")
    st.button("▶ Start Live", key="live_start", on_click=_start, disabled=test_id is None or poller.armed,
              type="primary", width="stretch")
with c_stop:
    st.write("")
    st.button("■ Stop", key="live_stop", on_click=_stop, disabled=not poller.armed, width="stretch")

# --------------------------
# Poll
# --------------------------
if poller.armed:
    st_autorefresh(interval=poller.interval_ms, key="live_refresh")
    poller.tick()

with c_status:
    last = poller.last_updated.strftime("%H:%M:%S") if poller.last_updated else "—"
    st.caption(f"Last update: {last}")
    if poller.armed:
        st.markdown("<span style='color:#dc2626;font-weight:600'>LIVE — receiving data</span>",
                    unsafe_allow_html=True)

if poller.last_error:
    st.warning(f"⚠️ Last fetch failed, retrying: {poller.last_error}")

# --------------------------
# Charts
# --------------------------
frame = to_frame(poller.store.all())
st.caption(f"{len(frame)} points, cursor idx {poller.store.cursor}")

latest = summarize(frame)
if latest:
    metric_cols = st.columns(len(LIVE_CHARTS))
    for col, (kind, spec) in zip(metric_cols, LIVE_CHARTS.items()):
        value = latest.get(kind)
        col.metric(spec.title, "—" if value is None else f"{value:.2f}")

kinds = list(LIVE_CHARTS)
for row_start in range(0, len(kinds), 2):
    cols = st.columns(2)
    for col, kind in zip(cols, kinds[row_start:row_start + 2]):
        with col:
            st.plotly_chart(render_chart(kind, frame, height=260), width="stretch",
                            key=f"live_chart_{kind}")
