"""
Environment context for the HTTP API sample stack.

The deployment parameters for each environment live in ``cdk.json`` under
``context.<env>``. This module selects the block for the current run,
validates it against an explicit schema and hands back an immutable
``StackContext`` so that resource construction never has to deal with
missing or malformed values.

Usage:
    app = App()
    context_key, context = load_context(app)
"""

import logging
import os
import re
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

# Environment variable that selects the context block
ENV_VAR = "ENV"

PROD_CONTEXT_KEY = "prod"
DEV_CONTEXT_KEY = "dev"

# Retention values accepted by the LambdaFunction construct
SUPPORTED_LOG_RETENTION_DAYS = (1, 3, 5, 7, 14, 30, 60, 90, 120, 150, 180, 365)

_DOMAIN_PREFIX_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")
_RESERVED_DOMAIN_WORDS = ("aws", "amazon", "cognito")


class ConfigError(Exception):
    """Raised when the environment context cannot be loaded."""
    pass


def _check_url(url: str) -> str:
    parsed = urlparse(url)
    if not parsed.netloc:
        raise ValueError(f"'{url}' is not an absolute URL")
    if parsed.scheme != "http":
        # https, or a custom scheme for native apps (myapp://callback)
        return url
    # Cognito only accepts plain http for localhost
    if parsed.hostname == "localhost":
        return url
    raise ValueError(f"'{url}' must not use plain http (only allowed for localhost)")


def _check_urls(urls: List[str]) -> List[str]:
    for url in urls:
        _check_url(url)
    if len(set(urls)) != len(urls):
        raise ValueError("URLs must be unique")
    return urls


class CognitoContext(BaseModel):
    """Cognito settings: hosted domain prefix and OAuth redirect URLs."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    domain_prefix: str = Field(alias="domainPrefix")
    callback_urls: List[str] = Field(alias="callbackUrls", min_length=1)
    logout_urls: List[str] = Field(alias="logoutUrls", default_factory=list)

    @field_validator("domain_prefix")
    @classmethod
    def validate_domain_prefix(cls, value: str) -> str:
        if not _DOMAIN_PREFIX_PATTERN.match(value):
            raise ValueError(
                "must be 1-63 lowercase letters, digits or hyphens "
                "and must not start or end with a hyphen"
            )
        for word in _RESERVED_DOMAIN_WORDS:
            if word in value:
                raise ValueError(f"must not contain the reserved word '{word}'")
        return value

    @field_validator("callback_urls", "logout_urls")
    @classmethod
    def validate_urls(cls, value: List[str]) -> List[str]:
        return _check_urls(value)


class StackContext(BaseModel):
    """Deployment parameters for one environment."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    cognito: CognitoContext
    log_retention_days: int = Field(alias="logRetentionDays", default=7, strict=True)

    @field_validator("log_retention_days")
    @classmethod
    def validate_log_retention_days(cls, value: int) -> int:
        if value not in SUPPORTED_LOG_RETENTION_DAYS:
            raise ValueError(
                f"must be one of {', '.join(str(d) for d in SUPPORTED_LOG_RETENTION_DAYS)}"
            )
        return value


def resolve_context_key(env_value: Optional[str]) -> str:
    """Return the context key for an ``ENV`` value (anything but prod is dev)."""
    return PROD_CONTEXT_KEY if env_value == PROD_CONTEXT_KEY else DEV_CONTEXT_KEY


def _format_location(loc: Tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def parse_context(raw: Optional[Dict[str, Any]], context_key: str) -> StackContext:
    """
    Validate a raw context block.

    Args:
        raw: Value of ``context.<context_key>`` from cdk.json
        context_key: Context key the block was read from (used in messages)

    Returns:
        Validated, immutable StackContext

    Raises:
        ConfigError: If the block is missing or any field is missing/invalid
    """
    if raw is None:
        raise ConfigError(f"Context '{context_key}' not found in cdk.json")

    try:
        return StackContext.model_validate(raw)
    except ValidationError as e:
        problems = [
            f"{_format_location(err['loc'])}: {err['msg']}"
            for err in e.errors(include_url=False)
        ]
        raise ConfigError(
            f"Invalid context '{context_key}': " + "; ".join(problems)
        ) from e


def load_context(app, env_value: Optional[str] = None) -> Tuple[str, StackContext]:
    """
    Select and validate the context block for this synthesis run.

    Args:
        app: CDK App (or any construct) used to read the context
        env_value: Override for the ``ENV`` environment variable

    Returns:
        Tuple of (context key, StackContext)
    """
    if env_value is None:
        env_value = os.getenv(ENV_VAR)
    context_key = resolve_context_key(env_value)
    logger.info(f"Using context '{context_key}' ({ENV_VAR}={env_value!r})")

    raw = app.node.try_get_context(context_key)
    return context_key, parse_context(raw, context_key)
