"""Validation utilities for configuration and request parameters."""

import math
import warnings
from typing import Any, Mapping, Type, Union

from typing_extensions import get_type_hints

from .types.exceptions import RequestValidationException

JSONScalar = Union[str, int, float, bool, None]


def validate_config_keys(config_dict: Mapping[str, Any], config_class: Type) -> None:
    """Validate that config keys match the TypedDict fields.

    Args:
        config_dict: Dictionary of configuration parameters
        config_class: TypedDict class to validate against
    """
    valid_keys = set(get_type_hints(config_class).keys())
    provided_keys = set(config_dict.keys())
    invalid_keys = provided_keys - valid_keys

    if invalid_keys:
        warnings.warn(
            f"Invalid configuration parameters: {sorted(invalid_keys)}.\nValid parameters are: {sorted(valid_keys)}.",
            stacklevel=4,
        )


def validate_extra_body(extra_body: Any) -> dict[str, JSONScalar]:
    """Validate that extra_body is a flat JSON object.

    Args:
        extra_body: The extension map supplied by the caller.

    Returns:
        The extension map, typed as a mapping of keys to scalar values.

    Raises:
        RequestValidationException: If extra_body is not an object, or if any key is not a string or any value is not
            a JSON scalar, or if a number is not finite.
    """
    if not isinstance(extra_body, dict):
        raise RequestValidationException(
            f"extra_body_type=<{type(extra_body).__name__}> | extra_body must be formatted as a map of key: value"
        )

    for key, value in extra_body.items():
        if not isinstance(key, str):
            raise RequestValidationException(f"key=<{key!r}> | extra_body keys must be strings")
        if value is not None and not isinstance(value, (str, int, float, bool)):
            raise RequestValidationException(
                f"key=<{key}>, value_type=<{type(value).__name__}> | extra_body values must be JSON scalars"
            )
        if isinstance(value, float) and not math.isfinite(value):
            raise RequestValidationException(f"key=<{key}>, value=<{value}> | extra_body numbers must be finite")

    return extra_body
