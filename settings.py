# settings.py
import os

# --------------------------
# Backend
# --------------------------
API_URL = os.getenv("BENCH_API_URL", "http://127.0.0.1:8000").rstrip("/")
API_TIMEOUT = float(os.getenv("BENCH_API_TIMEOUT", "10"))

# --------------------------
# Live polling
# --------------------------
POLL_INTERVAL_MS = int(os.getenv("BENCH_POLL_MS", "2000"))
LIVE_BATCH_LIMIT = int(os.getenv("BENCH_LIVE_LIMIT", "500"))

LOG_LEVEL = os.getenv("BENCH_LOG_LEVEL", "INFO").upper()

# --------------------------
# Bench layout
# --------------------------
SYSTEMS = (1, 2, 3)
DEFAULT_STEP = 200  # historical downsample step

UPLOAD_EXTENSIONS = ("csv", "txt", "xlsx", "xls")

# --------------------------
# Characterization
# --------------------------
SPEEDS = [1000, 4000, 6000, 9000, 12000, 14000]   # rpm, table columns
CURRENTS = [2, 5, 9, 12, 17, 22]                   # A, table rows
TEMP_TARGETS = [20, 60, 90, 120]                   # ambient °C
LIFE_STAGES = {
    "bol": "Beginning of test (BOL)",
    "mid": "Middle of test (MID)",   # backend expects "mid", not "mol"
    "eol": "End of test (EOL)",
}
