from __future__ import annotations

import logging
import os

SITE_NAME = "VoltServers"
SUPPORT_URL = "https://voltservers.com/support"

# Webserver bind (NiceGUI host/port)
SERVER_HOST: str = os.getenv("VOLT_SERVER_IP", "0.0.0.0")
SERVER_PORT: int = int(os.getenv("VOLT_SERVER_PORT", "8080"))

# Base URL the views use to reach the JSON API (normally this same server)
API_BASE_URL: str = os.getenv("VOLT_API_BASE_URL", f"http://127.0.0.1:{SERVER_PORT}")
# Upstream public status service behind /api/query-server
STATUS_API_URL: str = os.getenv("VOLT_STATUS_API_URL", "https://api.mcsrvstat.us/3")

# Seconds between status poll cycles (one poller per open view)
STATUS_POLL_INTERVAL_S: float = float(os.getenv("VOLT_POLL_INTERVAL_S", "60"))
HTTP_TIMEOUT_S: float = float(os.getenv("VOLT_HTTP_TIMEOUT_S", "5.0"))
DEFAULT_QUERY_PORT = 25565

STORAGE_SECRET: str = os.getenv("VOLT_STORAGE_SECRET", "voltservers-dev-secret")

COOKIE_CONSENT_KEY = "cookie-consent"
COOKIE_POLICY_TEXT = (
    "We use cookies to enhance your experience and analyze site traffic."
)
COOKIE_POLICY_URL = "/privacy-policy"


def _resolve_log_level() -> int:
    s = os.getenv("VOLT_LOG_LEVEL")
    if s:
        name = s.strip().upper()
        mapping = {
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL,
        }
        return mapping.get(name, logging.WARNING)
    else:
        return logging.WARNING


LOG_LEVEL: int = _resolve_log_level()
