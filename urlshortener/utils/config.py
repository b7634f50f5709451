"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to access
configuration data stored in **AWS AppConfig**. Each environment (`APP_ENV`) has
a dedicated AppConfig *Environment* within the shared AppConfig *Application*
identified by `APP_NAME`. Configuration data is stored as a JSON document under
a configuration profile and deployed to the corresponding environment.

The configuration JSON follows this structure:

    {
        "active_backend": "redis",
        "configs": {
            "shorten_url": {
                "redis": { ... },
                "shortcode": {"salt": "...", "length": 7}
            },
            "redirect_url": {
                "redis": { ... }
            }
        }
    }

When running locally (SAM or plain `APP_ENV=local`) the lambda's section is read
from a YAML file instead:

    config/
    ├── shorten_url/
    │   └── local.yml
    └── redirect_url/
        └── local.yml

Typical usage inside a Lambda handler:
    >>> from urlshortener.utils.config import load_config
    >>> config = load_config('shorten_url')
    >>> print(config['redis']['host'])
    localhost
"""

import os
import json
import functools
import logging
from pathlib import Path
from collections.abc import Callable
from typing import Any

import boto3
import yaml

from urlshortener.types import AppConfigDataClient, LambdaConfiguration
from urlshortener.constants import ENV
from urlshortener.exceptions import BadConfigurationError
from urlshortener.utils.helpers import require_environment
from urlshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)

DEFAULT_BACKEND = 'redis'
OPTIONAL_SECTIONS = ('shortcode',)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, Path(__file__).resolve().parent.parent.parent))


def app_prefix() -> str | None:
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _select_backend(section: dict[str, Any], backend: str, lambda_name: str) -> LambdaConfiguration:
    """Keep only the active backend's settings plus backend-independent sections."""
    if backend not in section:
        raise BadConfigurationError(f"No '{backend}' configuration for lambda '{lambda_name}'.")

    data = {backend: section[backend]}
    for name in OPTIONAL_SECTIONS:
        if name in section:
            data[name] = section[name]
    return data


def _load_local_config(func: Callable) -> Callable:
    """Decorator: load the lambda's configuration from a local YAML file when running locally.

    Behavior:
        - If the application is running locally, read `config/<lambda_name>/<APP_ENV>.yml`
          under `project_root()`.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Raises:
        FileNotFoundError: If the YAML file doesn't exist.
        BadConfigurationError: If the file lacks the active backend section.
    """

    @functools.wraps(func)
    def wrapper(lambda_name: str) -> LambdaConfiguration:
        if not running_locally():
            return func(lambda_name)

        path = project_root() / 'config' / lambda_name / f'{app_env()}.yml'
        logger.debug('Trying to load configuration from local YAML file.', extra={'path': str(path), 'lambdaName': lambda_name})
        if not path.is_file():
            raise FileNotFoundError(f'YAML not found: {path}')
        with path.open('r', encoding='utf-8') as f:
            section = yaml.safe_load(f) or {}

        data = _select_backend(section, section.get('active_backend', DEFAULT_BACKEND), lambda_name)
        logger.debug('Loaded configuration from local YAML file.', extra={'lambdaName': lambda_name})
        return data

    return wrapper


@_load_local_config
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig.

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'shorten_url', 'redirect_url').

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Returns:
        dict: {<active backend>: {...}, "shortcode": {...}}, the latter only if configured.

    Raises:
        MissingEnvironmentVariableError: If an AppConfig identifier is not set.
        BadConfigurationError: If the document has no section for the lambda or its backend.
        botocore.exceptions.ClientError: On AppConfig API failures.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig: AppConfigDataClient = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    config = json.loads(content.decode('utf-8'))

    try:
        section = config['configs'][lambda_name]
    except KeyError as e:
        raise BadConfigurationError(f"AppConfig document has no configuration for lambda '{lambda_name}'.") from e

    data = _select_backend(section, config.get('active_backend', DEFAULT_BACKEND), lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': config.get('build')})
    return data
