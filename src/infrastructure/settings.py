"""Application Settings and Configuration.

Settings are read from environment variables with the ``DR_`` prefix and
fall back to development defaults. ``get_setting`` is the lookup that
display code (date formatting, currency) goes through.
"""

import os
from typing import Any

# Application metadata
APP_NAME = "Dental-Records"
APP_VERSION = "1.0.0"

DEFAULT_DATE_FORMAT = "dd/MM/yyyy"
DEFAULT_CURRENCY = "$"


class Settings:
    """Application settings loaded from the environment.

    Attributes:
        app_name: Display name used by the CLI
        log_level: Root logging level
        log_json: Emit structured JSON logs
        date_format: Pattern for ``format_date`` (``yyyy``, ``MM``, ``dd`` tokens)
        currency: Currency symbol shown next to amounts
        patients_file: Default JSON file holding patient records
        appointments_file: Default JSON file holding ledger entries
    """

    def __init__(self):
        """Initialize settings from environment."""
        self.app_name = os.getenv("DR_APP_NAME", APP_NAME)
        self.log_level = os.getenv("DR_LOG_LEVEL", "WARNING")
        self.log_json = os.getenv("DR_LOG_JSON", "false").lower() == "true"

        # Display settings
        self.date_format = os.getenv("DR_DATE_FORMAT", DEFAULT_DATE_FORMAT)
        self.currency = os.getenv("DR_CURRENCY", DEFAULT_CURRENCY)

        # Data files
        self.patients_file = os.getenv("DR_PATIENTS_FILE", "data/patients.json")
        self.appointments_file = os.getenv("DR_APPOINTMENTS_FILE", "data/appointments.json")

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a setting by name.

        Raises:
            KeyError: If the key is unknown and no default is given
        """
        if key in vars(self):
            return vars(self)[key]
        if default is not None:
            return default
        raise KeyError(f"Unknown setting: {key}")


# Global settings instance
settings = Settings()


def get_setting(key: str) -> Any:
    return settings.get(key)
