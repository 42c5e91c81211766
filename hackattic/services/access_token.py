import re

from hackattic.config import Settings, settings as default_settings
from hackattic.exceptions import ConfigError, ValidationError
from hackattic.logging_config import get_logger

logger = get_logger(__name__)

ACCESS_TOKEN_PATTERN = re.compile(r"^[0-9a-f]{16}$")


def validate_access_token(token: str) -> str:
    """
    Check that an access token is 16 lowercase hex characters.

    Returns the token unchanged. Raises ConfigError when empty and
    ValidationError when malformed.
    """
    if not token:
        logger.error("access_token_missing")
        raise ConfigError("Access token cannot be empty (set ACCESS_TOKEN)")

    if not ACCESS_TOKEN_PATTERN.fullmatch(token):
        # Length only: the value itself is a secret
        logger.error("access_token_invalid", length=len(token))
        raise ValidationError("Access token must be 16 lowercase hex characters")

    return token


def get_access_token(settings: Settings | None = None) -> str:
    """Read the access token from configuration (ACCESS_TOKEN or .env) and validate it."""
    settings = settings or default_settings
    return validate_access_token(settings.access_token)
