"""Form data (configuration) store - one JSON object on disk"""

import json
import os

import atip_submitter.config as config
from atip_submitter.utils.logging import log_warn

REQUIRED_FIELDS = ["url"]

KNOWN_FIELDS = [
    "url",
    "requestor_category",
    "delivery_method",
    "given_name",
    "family_name",
    "email",
    "phone",
    "address",
    "address_2",
    "city",
    "postal_code",
    "state_province",
    "country",
    "preferred_language",
    "consent",
    "additional_comments",
    "countdown_seconds",
]


class ConfigError(ValueError):
    """Configuration is missing or unusable - the run cannot start"""


def validate_config(data):
    """Raise ConfigError if `data` cannot drive a pipeline run"""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object.")

    missing = [name for name in REQUIRED_FIELDS if not data.get(name)]
    if missing:
        raise ConfigError(
            f"Missing required configuration field(s): {', '.join(missing)}"
        )

    if not str(data["url"]).startswith("https://"):
        raise ConfigError("Configuration 'url' must start with 'https://'")

    countdown = data.get("countdown_seconds")
    if countdown not in (None, ""):
        try:
            countdown = float(countdown)
        except (TypeError, ValueError):
            countdown = None
        if countdown is None or not 1 <= countdown <= 60:
            raise ConfigError(
                "Configuration 'countdown_seconds' must be between 1 and 60"
            )

    unknown = sorted(set(data) - set(KNOWN_FIELDS))
    if unknown:
        log_warn(f"Ignoring unknown configuration field(s): {', '.join(unknown)}")


def get_countdown_seconds(data):
    countdown = data.get("countdown_seconds")
    if countdown in (None, ""):
        return config.DEFAULT_COUNTDOWN_SECONDS
    return float(countdown)


def read_form_data(path=None):
    """Read the raw configuration without validating (empty dict if absent)"""
    path = path or config.CONFIG_FILE
    if not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_form_data(path=None):
    """Load and validate the configuration for a pipeline run"""
    path = path or config.CONFIG_FILE
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(
            f"Configuration file '{path}' not found. "
            "Please create it or use the config editor (--editor)."
        )
    except json.JSONDecodeError as e:
        raise ConfigError(f"Configuration file contains invalid JSON: {e}")

    validate_config(data)
    return data


def save_form_data(data, path=None):
    """Persist the configuration as pretty-printed JSON"""
    path = path or config.CONFIG_FILE
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
