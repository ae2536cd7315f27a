"""
Recitation checker settings, read from environment variables after loading a
local .env: server address, log level, session history size and CORS origins.
"""
import os

from dotenv import load_dotenv

# Values already set in the environment win over .env
load_dotenv()

# ----- Server -----
PORT = int(os.environ.get("PORT", "8001"))
HOST = os.environ.get("HOST", "0.0.0.0")

# ----- Logging -----
# DEBUG traces alignment and scoring summaries
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# ----- Session history -----
HISTORY_LIMIT = int(os.environ.get("HISTORY_LIMIT", "50"))

# ----- CORS (production: set to specific origins) -----
CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
def get_cors_origins() -> list:
    """Return list of allowed CORS origins from env."""
    if CORS_ORIGINS == "*":
        return ["*"]
    return [o.strip() for o in CORS_ORIGINS.split(",") if o.strip()]
