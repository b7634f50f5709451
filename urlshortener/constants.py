from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Short link TTL duration (data retention period) (1 year in seconds)
    ONE_YEAR = 31_536_000  # 60 * 60 * 24 * 365


class Shortcode:
    """Shortcode generation defaults."""

    LENGTH = 7
    SALT = 'default_salt'
    MAX_ATTEMPTS = 5  # Insert retries on shortcode collision


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
