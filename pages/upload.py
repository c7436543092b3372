import streamlit as st

import settings
from _shared_ui import get_api, setup_logging, stop_live, top_bar
from api_client import ApiError
from UploadData import process_upload

st.set_page_config(page_title="Upload", page_icon="📤", layout="wide")
setup_logging()
stop_live()

top_bar(page_icon="📤", title="Upload fichier (CSV / Excel / TXT)", home_page_path="Home.py")

# ---------- ALWAYS RENDER THE UPLOADER ----------
uploaded = st.file_uploader(
    "Drag & drop votre fichier ici",
    type=list(settings.UPLOAD_EXTENSIONS),
    accept_multiple_files=False,
    key="bench_uploader",
)

if uploaded is not None:
    st.info(f"Sélectionné: {uploaded.name} ({round(uploaded.size / 1024)} KB)")

if st.button("Upload", type="primary", disabled=uploaded is None):
    try:
        with st.spinner("Upload en cours…"):
            result = process_upload(get_api(), uploaded.name, uploaded.getvalue())
    except ValueError as exc:
        st.error(str(exc))
    except ApiError as exc:
        st.error(f"❌ Upload failed: {exc}")
    else:
        st.success(result.message())
        if result.test_id is not None:
            st.session_state["viewer_preferred_test"] = result.test_id
        st.switch_page("pages/test_viewer.py")
