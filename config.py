import os

# --- Paths ---
# Project root directory
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))

# Unit and format definitions (YAML), override with OPDI_UNITS_CONFIG
UNITS_CONFIG_PATH = os.environ.get("OPDI_UNITS_CONFIG", os.path.join(PROJECT_ROOT, "units.yaml"))


# --- API ---
# Base URL of the API server; its port is the default listen port of app.py
API_BASE_URL = "http://localhost:50009"


# --- Logging ---
# Log level (DEBUG shows property segments dropped by the parser)
LOG_LEVEL = os.environ.get("OPDI_LOG_LEVEL", "INFO")
# Log line format, shared by app.py and main.py
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
