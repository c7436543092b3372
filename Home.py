
import streamlit as st

import settings
from _shared_ui import setup_logging, stop_live

st.set_page_config(page_title="Bench Dashboard", page_icon="🏠", layout="wide")
setup_logging()
stop_live()

# ---------- Card styling for st.button ----------
st.markdown("""
<style>
/* Make all st.button look like clean "cards" */
.stButton > button {
  width: 100% !important;
  text-align: left !important;
  border-radius: 14px !important;
  border: 1px solid #e6e6e6 !important;
  background: #ffffff !important;
  color: #111827 !important;
  padding: 14px 16px !important;
  box-shadow: 0 1px 2px rgba(0,0,0,0.03) !important;
  white-space: pre-wrap !important; /* allow \\n to wrap to a second line */
  line-height: 1.15 !important;
}
.stButton > button:hover {
  box-shadow: 0 6px 16px rgba(0,0,0,0.08) !important;
  transform: translateY(-1px);
}
</style>
""", unsafe_allow_html=True)

st.title("Renault Bench Dashboard")
st.caption(f"Backend: {settings.API_URL}")
st.write("---")

left, right = st.columns(2)

# --- DATA ---
with left:
    st.markdown("#### 📤 Data")

    if st.button("📤  Upload\nImport a bench file (CSV / Excel / TXT).",
                 width="stretch", key="upload"):
        st.switch_page("pages/upload.py")

    if st.button("📈  Test Viewer\nHistorical charts of a stored test, per system.",
                 width="stretch", key="viewer"):
        st.switch_page("pages/test_viewer.py")

# --- ANALYSIS ---
with right:
    st.markdown("#### 🔴 Live & analysis")

    if st.button("🔴  Live Test Viewer\nFollow a running test, refreshed every "
                 f"{settings.POLL_INTERVAL_MS / 1000:g} s.",
                 width="stretch", key="live"):
        st.switch_page("pages/live_viewer.py")

    if st.button("🗺️  Characterization\nVoltage drop maps: BOL / MID / EOL × ambient temperature.",
                 width="stretch", key="characterization"):
        st.switch_page("pages/characterization_maps.py")
