# tak_setup/config.py
"""
Static constants and default values for the TAK server setup.

Values here are the fallbacks used by the Pydantic settings models in
``tak_setup.config_models``; anything an operator may want to change is
exposed there and can be overridden by YAML, environment or CLI.
"""

from pathlib import Path

SCRIPT_VERSION: str = "2.0.0"

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

# --- Host prerequisites ---
REQUIRED_COMMANDS_DEFAULT: list[str] = ["docker", "netstat", "unzip"]
REQUIRED_PORTS_DEFAULT: list[int] = [5432, 8089, 8443, 8444, 8446, 9000, 9001]

# --- Install tree and release archive ---
INSTALL_DIR_DEFAULT: str = "tak"
SCRATCH_DIR_DEFAULT: str = "/tmp/takserver"
RELEASE_GLOB_DEFAULT: str = "*-RELEASE-*.zip"
RELEASE_SUBDIR_DEFAULT: str = "tak"
DB_VOLUME_DEFAULT: str = "tak-server_db_data"

# --- docker compose ---
ENV_FILE_DEFAULT: str = ".env"
COMPOSE_FILE_DEFAULT: str = "docker-compose.yml"
COMPOSE_FILE_ARM_DEFAULT: str = "docker-compose.arm.yml"
SERVICE_NAME_DEFAULT: str = "tak"

# --- Certificate subject defaults (used when the operator enters nothing) ---
COUNTRY_DEFAULT: str = "US"
STATE_DEFAULT: str = "state"
CITY_DEFAULT: str = "city"
ORGANIZATIONAL_UNIT_DEFAULT: str = "org"

# --- Certificate provisioning ---
CA_NAME_DEFAULT: str = "CRFtakserver"
CLIENT_IDENTITY_DEFAULT: str = "admin"
CONTAINER_CERTS_DIR_DEFAULT: str = "/opt/tak/certs"
CA_FILE_RELATIVE_DEFAULT: str = "certs/files/ca.pem"
CERT_MAX_ATTEMPTS_DEFAULT: int = 6
# Gives the database container time to stop flooding the log on startup.
CERT_RETRY_DELAY_SECONDS_DEFAULT: float = 10.0

# --- Post-provisioning ---
CORE_CONFIG_RELATIVE_DEFAULT: str = "CoreConfig.xml"
KEYSTORE_PLACEHOLDER_DEFAULT: str = "takserver.jks"
USER_MANAGER_JAR_DEFAULT: str = "/opt/tak/utils/UserManager.jar"
SETTLE_SECONDS_DEFAULT: float = 10.0
WEB_UI_PORT_DEFAULT: int = 8443

# --- Logging ---
LOG_PREFIX_DEFAULT: str = "[TAK-SETUP]"

SYMBOLS_DEFAULT: dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "critical": "🔥",
    "debug": "🐛",
}
