"""Centralized configuration locations.

Client configuration is read from the process environment, falling back to a
config directory:
    <config dir>/.env              - GDRIVE_CLIENT_ID, GDRIVE_CLIENT_SECRET, ...
    <config dir>/credentials.json  - Google OAuth client credentials

The config directory is ~/.config/gdrive-lite unless GDRIVE_LITE_HOME is set.

This module auto-loads the .env file on import, so ClientConfig.from_env()
sees those values without any additional setup.
"""

import os
from pathlib import Path

CONFIG_DIR = Path(
    os.environ.get("GDRIVE_LITE_HOME") or Path.home() / ".config" / "gdrive-lite"
).expanduser()

ENV_FILE = CONFIG_DIR / ".env"
CREDENTIALS_FILE = CONFIG_DIR / "credentials.json"

# Environment variable names read by ClientConfig.from_env()
ENV_CLIENT_ID = "GDRIVE_CLIENT_ID"
ENV_CLIENT_SECRET = "GDRIVE_CLIENT_SECRET"
ENV_REDIRECT_URI = "GDRIVE_REDIRECT_URI"
ENV_SCOPE = "GDRIVE_SCOPE"
ENV_ACCESS_TOKEN = "GDRIVE_ACCESS_TOKEN"

# Out-of-band redirect: Google shows the code to the user instead of redirecting
DEFAULT_REDIRECT_URI = "urn:ietf:wg:oauth:2.0:oob"


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Copy KEY=value lines from env_path into os.environ.

    Blank lines, # comments and lines without "=" are skipped, and one pair
    of matching quotes around a value is removed. Variables already in the
    environment are left as they are.

    Returns:
        The variables that were set.
    """
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


def ensure_config_dir() -> Path:
    """Create the config directory if it doesn't exist.

    Returns:
        Path to the config directory.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return CONFIG_DIR


def get_config_status() -> dict:
    """Get status of the configuration inputs.

    Returns:
        Dictionary with configuration status.
    """
    return {
        "config_dir": str(CONFIG_DIR),
        "env_file": ENV_FILE.exists(),
        "credentials_file": CREDENTIALS_FILE.exists(),
        "env": {
            "client_id": bool(os.environ.get(ENV_CLIENT_ID)),
            "client_secret": bool(os.environ.get(ENV_CLIENT_SECRET)),
            "redirect_uri": bool(os.environ.get(ENV_REDIRECT_URI)),
            "scope": bool(os.environ.get(ENV_SCOPE)),
            "access_token": bool(os.environ.get(ENV_ACCESS_TOKEN)),
        },
    }


_loaded = _load_env_file(ENV_FILE)
