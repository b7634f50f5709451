"""Application exceptions.

    UrlShortenerError
    ├── ConfigurationError
    │   ├── MissingEnvironmentVariableError
    │   └── BadConfigurationError
    └── InfrastructureError
        └── DeploymentError

Data access errors live in `urlshortener.dao.exceptions` and derive from
UrlShortenerError as well. Every class carries a machine-readable
`error_code` of the form '<area>:<name>'.
"""


class UrlShortenerError(Exception):
    error_code = 'app:urlshortener_error'


class ConfigurationError(UrlShortenerError):
    """The lambda configuration can't be loaded or used."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    error_code = 'config:missing_environment_variable'


class BadConfigurationError(ConfigurationError):
    """The configuration document lacks a required section or value."""

    error_code = 'config:bad_configuration'


class InfrastructureError(UrlShortenerError):
    error_code = 'infra:infrastructure_error'


class DeploymentError(InfrastructureError):
    """A change set or stack operation ended in a failed or rolled back state."""

    error_code = 'infra:deployment_failed'
