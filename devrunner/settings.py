"""
This module contains the default configuration settings for devrunner.
It defines discovery timings, GraphQL probing, the notification channel and
logging. Values can be overridden from the environment or a `.env` file.
"""

import os
import pathlib
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

#* --- Core Paths ---
CONFIG_DIR = pathlib.Path(os.getenv("DEVRUNNER_CONFIG_DIR", pathlib.Path.home() / ".devrunner"))
OVERRIDES_JSON_PATH = pathlib.Path(os.getenv("DEVRUNNER_OVERRIDES_PATH", CONFIG_DIR / "overrides.json"))

#* --- Endpoint Discovery ---
DISCOVERY_TIMEOUT_SECONDS = float(os.getenv("DEVRUNNER_DISCOVERY_TIMEOUT", "5"))
# Pause between two scans while waiting for a new endpoint
DISCOVERY_POLL_INTERVAL = float(os.getenv("DEVRUNNER_DISCOVERY_POLL_INTERVAL", "0.1"))
GRAPHQL_PROBE_TIMEOUT = float(os.getenv("DEVRUNNER_PROBE_TIMEOUT", "0.5"))
# Upper bound on the time one scan spends probing sockets
GRAPHQL_SCAN_BUDGET = float(os.getenv("DEVRUNNER_SCAN_BUDGET", "0.75"))
GRAPHQL_PROBE_PATHS = ("/", "/graphql", "/query")
GRAPHQL_PROBE_QUERY = "query { __typename }"

#* --- Notification Channel ---
NOTIFY_URL = os.getenv("DEVRUNNER_NOTIFY_URL", "http://127.0.0.1:4099")
NOTIFY_TIMEOUT = float(os.getenv("DEVRUNNER_NOTIFY_TIMEOUT", "2"))

#* --- Logging ---
LOG_LEVEL = os.getenv("DEVRUNNER_LOG_LEVEL", "INFO").upper()
LOG_FILE_PATH = os.getenv("DEVRUNNER_LOG_FILE") or None

#* --- MODIFIABLE SETTINGS (Changeable through the overrides file) ---
MODIFIABLE_SETTINGS = {
    "DISCOVERY_TIMEOUT_SECONDS", "DISCOVERY_POLL_INTERVAL",
    "GRAPHQL_PROBE_TIMEOUT", "GRAPHQL_SCAN_BUDGET", "GRAPHQL_PROBE_PATHS",
    "NOTIFY_URL", "NOTIFY_TIMEOUT",
    "LOG_LEVEL", "LOG_FILE_PATH",
}
