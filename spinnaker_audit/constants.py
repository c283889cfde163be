import os

# Configurações globais de ambiente
APP_PORT = int(os.getenv("APP_PORT", "8080"))
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"

# Arquivo JSON opcional (mesmo formato do config.json da Cloud Function)
AUDIT_CONFIG_FILE = os.getenv("AUDIT_CONFIG_FILE")

# Credenciais do webhook (echo -> proxy)
AUTH_USERNAME = os.getenv("AUTH_USERNAME")
AUTH_PASSWORD = os.getenv("AUTH_PASSWORD")

# Renderização de datas
AUDIT_TIMEZONE = os.getenv("AUDIT_TIMEZONE")
DEFAULT_TIMEZONE = "UTC"
TIMESTAMP_FORMAT = "%a, %d %b %Y %H:%M:%S %Z"

# Google Cloud Logging
GCP_PROJECT_ID = os.getenv("GCP_PROJECT_ID")
GCP_KEY_FILENAME = os.getenv("GCP_KEY_FILENAME")
AUDIT_LOG_NAME = os.getenv("AUDIT_LOG_NAME")
DEFAULT_LOG_NAME = "spinnaker-audit-log"
SINK_MAX_WORKERS = int(os.getenv("SINK_MAX_WORKERS", "4"))

# Envelope do echo
SPINNAKER_EVENT_NAME = "spinnaker_events"
MESSAGE_PREFIX = "Spinnaker: "
UNKNOWN_USER = "n/a"

SEVERITY_INFO = "info"
SEVERITY_WARNING = "warning"
SEVERITY_ERROR = "error"
SEVERITY_DEBUG = "debug"

# Severidade equivalente no Cloud Logging
CLOUD_SEVERITIES = {
    SEVERITY_INFO: "INFO",
    SEVERITY_WARNING: "WARNING",
    SEVERITY_ERROR: "ERROR",
    SEVERITY_DEBUG: "DEBUG",
}
