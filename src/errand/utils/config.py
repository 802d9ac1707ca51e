"""Simple configuration loader"""

import os
import sys
import yaml
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

BLOCK_STYLES = ("standard", "saas")


def _is_pytest_running() -> bool:
    """Detect if running in pytest environment"""
    return (
        "PYTEST_CURRENT_TEST" in os.environ
        or "pytest" in sys.modules
        or any("pytest" in arg.lower() for arg in sys.argv)
    )


def load_config(config_file: str = None):
    """
    Load configuration file

    Priority:
    1. config_file parameter
    2. ERRAND_CONFIG environment variable
    3. Auto use config.test.yaml in pytest environment
    4. Default to config.yaml
    """
    if config_file is None:
        config_file = os.getenv("ERRAND_CONFIG")

        if config_file is None:
            if _is_pytest_running():
                config_file = "config.test.yaml"
            else:
                config_file = "config.yaml"
            logger.info(f"No config file specified, using default: {config_file}")
        else:
            logger.info(f"Using config file from ERRAND_CONFIG: {config_file}")

    # if relative path, based on current running dir
    config_path = Path(config_file)
    if not config_path.exists():
        logger.warning(f"Config file {config_path} does not exist. Using empty config.")
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_api_base_url(config_file: str = None) -> str:
    config = load_config(config_file)
    base_url = (config.get("api") or {}).get("base_url", "")
    if not base_url:
        raise ValueError("Todo API base url not configured.")
    if not (base_url.startswith("http://") or base_url.startswith("https://")):
        raise ValueError("Unsupported todo API base url. Only http and https are supported.")
    return base_url.rstrip("/")


def get_api_timeout(config_file: str = None):
    """None means requests wait for the server indefinitely"""
    config = load_config(config_file)
    timeout = (config.get("api") or {}).get("timeout")
    return None if timeout is None else float(timeout)


def get_reload_after_mutation(config_file: str = None) -> bool:
    config = load_config(config_file)
    return bool((config.get("client") or {}).get("reload_after_mutation", False))


def get_block_style(config_file: str = None) -> str:
    config = load_config(config_file)
    style = (config.get("slack") or {}).get("style", "standard")
    if style.lower() not in BLOCK_STYLES:
        raise ValueError(f"Unknown block style: {style}")
    return style.lower()


def get_refresh_seconds(config_file: str = None) -> int:
    """Read file every time to get update"""
    config = load_config(config_file)
    return int((config.get("slack") or {}).get("refresh_seconds", 0) or 0)


def get_viewer_ttl_seconds(config_file: str = None) -> int:
    """home tabs not reopened within this window drop out of the refresh"""
    config = load_config(config_file)
    return int((config.get("slack") or {}).get("viewer_ttl_seconds", 3600) or 0)


def setup_global_logger(
    console_level="INFO", file_level="DEBUG", log_file_name="errand.log"
):
    """
    Set up a global logger with both console and file handlers.
    """
    logger = logging.getLogger()

    # Root stays at DEBUG, filtering is delegated to handlers
    logger.setLevel(logging.DEBUG)

    # [Time] - [Level] - [Module] - (File:Line) - [Message]
    formatter = logging.Formatter(
        "%(asctime)s - [%(levelname)s] - %(name)s - (%(filename)s:%(lineno)d) - %(message)s"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    try:
        file_handler = logging.FileHandler(log_file_name, mode="a", encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except IOError as e:
        logger.error(f"Unable to create log file {log_file_name}. Error: {e}")
        # Console logging still works even if file creation fails

    logger.info("Logging system configured.")
    logger.info(
        f"Console level: {logging.getLevelName(console_level)}, File level: {logging.getLevelName(file_level)}"
    )
