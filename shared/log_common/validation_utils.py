"""
Shared validation utilities for both API and container components
"""

import os
from typing import Optional

from log_common.errors import ConfigurationError


def is_blank(value: Optional[str]) -> bool:
    """
    Check whether a required string field is absent or empty.

    Args:
        value: Field value, possibly None

    Returns:
        True when the value is None or an empty string
    """
    return value is None or value == ""


def require_env(name: str) -> str:
    """
    Read a required environment variable.

    Args:
        name: Environment variable name

    Returns:
        The variable's value

    Raises:
        ConfigurationError: If the variable is unset or empty
    """
    value = os.environ.get(name)
    if not value:
        raise ConfigurationError(f"{name} environment variable not set")
    return value
