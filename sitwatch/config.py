import os

# --------------------------------------------------------------------
# API
# --------------------------------------------------------------------
BASE_URL = os.getenv("SITWATCH_BASE_URL", "https://api.sitwatch.net/api").rstrip("/")
TOKEN = os.getenv("SITWATCH_TOKEN", "").strip() or None
USER_AGENT = os.getenv("SITWATCH_USER_AGENT", "sitwatch-python")

# --------------------------------------------------------------------
# HTTP
# --------------------------------------------------------------------
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))
HTTP_RETRIES = int(os.getenv("HTTP_RETRIES", "0"))

# --------------------------------------------------------------------
# Watches
# --------------------------------------------------------------------
WATCH_INTERVAL_MS = int(os.getenv("WATCH_INTERVAL_MS", "5000"))
WATCH_RUN_SECONDS = float(os.getenv("WATCH_RUN_SECONDS", "0"))
