# config.py

import os
import yaml
import logging

logger = logging.getLogger(__name__)


def load_config():
    """
    Load configuration from the YAML file specified by CONFIG_PATH environment variable or the default path.

    A missing file is tolerated so the receiver can run from environment variables alone.

    Returns:
        dict: Parsed configuration dictionary.
    """
    CONFIG_PATH = os.getenv("CONFIG_PATH", "config.yaml")

    if not os.path.exists(CONFIG_PATH):
        logger.warning(f"Configuration file '{CONFIG_PATH}' not found. Using defaults and environment.")
        return {}

    try:
        with open(CONFIG_PATH, 'r') as f:
            config = yaml.safe_load(f) or {}
            logger.info(f"Configuration loaded successfully from '{CONFIG_PATH}'.")
            return config
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML file '{CONFIG_PATH}': {e}")
        raise


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in ("1", "true", "yes")


# Load the configuration file
config = load_config()

# Environment variables take precedence over the file (e.g., for containers and CI/CD)
WEBHOOK_SECRET = os.getenv("WEBHOOK_SECRET") or config.get("webhook_secret") or ""
HOST = os.getenv("HOST", config.get("host", "0.0.0.0"))
PORT = int(os.getenv("PORT", config.get("port", 3000)))
DEBUG_MODE = _env_flag("DEBUG_MODE", config.get("debug_mode", False))
LOG_DB_PATH = os.getenv("LOG_DB_PATH", config.get("log_db_path", "logs.db"))
MAX_LOG_ENTRIES = int(config.get("max_log_entries", 10000))

# Log summary of key settings (never the secret itself)
logger.info(f"Listening address: {HOST}:{PORT}")
logger.info(f"Webhook secret configured: {bool(WEBHOOK_SECRET)}")
logger.info(f"Log database: {LOG_DB_PATH or 'disabled'}")
