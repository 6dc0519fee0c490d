"""
Pronto Constants

Centralized constants for magic values, defaults, and configuration.
"""

# Application identity (also the configstore namespace)
APP_NAME = "pronto"

# Compose API
DEFAULT_API_URL = "https://api.compose.io/2016-07"
USER_ENDPOINT = "/user"
DEPLOYMENTS_ENDPOINT = "/deployments"
DEFAULT_DATACENTER = "aws:us-east-1"

# Token acquisition
TOKEN_KEY = "composeToken"
TOKEN_URL = "https://app.compose.io/oauth/api_tokens"

# Certificate output
CERTIFICATE_SUFFIX = ".crt"

# Log Configuration
DEFAULT_LOG_DIR = "~/.pronto/logs"
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

# File Permissions
SECRET_FILE_PERMISSIONS = 0o600

# Exit codes
EXIT_FAILURE = 1
EXIT_CANCELLED = 130

# Environment keys
ENV_API_URL = "PRONTO_API_URL"
ENV_CONFIG_DIR = "PRONTO_CONFIG_DIR"
ENV_LOG_DIR = "PRONTO_LOG_DIR"
ENV_HTTP_TIMEOUT = "PRONTO_HTTP_TIMEOUT"
