import os

from worldview.errors import ConfigurationError


def _env_float(name, default):
    raw = os.getenv(name, str(default))
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def _env_int(name, default):
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


states_url = os.getenv("WORLDVIEW_STATES_URL", "https://opensky-network.org/api/states/all")
proxy_url = os.getenv("WORLDVIEW_PROXY_URL", "https://api.allorigins.win/raw?url={url}")
fetch_timeout = _env_float("WORLDVIEW_FETCH_TIMEOUT", 8)
refresh_interval = _env_float("WORLDVIEW_REFRESH_INTERVAL", 15)
orbit_interval = _env_float("WORLDVIEW_ORBIT_INTERVAL", 3)
entity_cap = _env_int("WORLDVIEW_ENTITY_CAP", 500)
ui_update_interval = _env_float("WORLDVIEW_UI_INTERVAL", 0.5)
log_level = os.getenv("WORLDVIEW_LOG_LEVEL", "INFO").upper()
log_file = os.getenv("WORLDVIEW_LOG_FILE", "worldview.log")
