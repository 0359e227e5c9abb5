# fs_bridge/config.py - Environment-driven settings for the service and client

import os

from dotenv import load_dotenv

load_dotenv()

# --- Server ---
HOST = os.getenv("FS_BRIDGE_HOST", "127.0.0.1")
PORT = int(os.getenv("FS_BRIDGE_PORT", 8000))
LOG_LEVEL = os.getenv("FS_BRIDGE_LOG_LEVEL", "INFO").upper()

# --- Filesystem behaviour ---
MAX_TREE_DEPTH = int(os.getenv("FS_BRIDGE_MAX_TREE_DEPTH", 256))

# --- Client ---
API_BASE_URL = os.getenv("FS_BRIDGE_API_URL", f"http://{HOST}:{PORT}")
CLIENT_TIMEOUT = float(os.getenv("FS_BRIDGE_CLIENT_TIMEOUT", 30))
