"""Request converters.

Providers that expose an OpenAI-style audio API do not always agree on the request body. A request converter rewrites
the canonical (OpenAI-shaped) JSON body into the body a specific provider expects, right before it is sent.

Example:
    >>> def to_provider_format(request: dict[str, Any]) -> dict[str, Any]:
    ...     return {**request, "speaker": request["voice"]}
    >>> audio = client.audio(request_converter=to_provider_format)
"""

from typing import Any, Protocol

from pydantic import BaseModel

from ..types.exceptions import SerializationException


class RequestConverter(Protocol):
    """Protocol for request body converters.

    A converter is shared by every in-flight request made through the same `Audio` handle and may be called
    concurrently. It must therefore be pure: it must not read or write state outside its argument, and it must not keep
    a reference to the dict it is given.
    """

    def __call__(self, request: dict[str, Any]) -> dict[str, Any]:
        """Convert a canonical request body.

        Args:
            request: The canonical JSON body.

        Returns:
            The provider-specific JSON body.
        """
        ...


def to_canonical_json(parameters: BaseModel) -> dict[str, Any]:
    """Serialize request parameters into their canonical JSON body.

    Unset optional fields are left out of the body.

    Args:
        parameters: The request parameters.

    Returns:
        The canonical JSON body.

    Raises:
        SerializationException: If the parameters cannot be represented as JSON.
    """
    try:
        return parameters.model_dump(mode="json", exclude_none=True)
    except (TypeError, ValueError) as e:
        raise SerializationException(
            f"parameters_type=<{type(parameters).__name__}> | failed to serialize request parameters"
        ) from e


def apply_request_converter(converter: RequestConverter, request: dict[str, Any]) -> dict[str, Any]:
    """Run a request converter over a canonical body.

    Args:
        converter: The converter to run.
        request: The canonical JSON body.

    Returns:
        The provider-specific JSON body.

    Raises:
        SerializationException: If the converter does not return a JSON object.
    """
    converted = converter(request)
    if not isinstance(converted, dict):
        raise SerializationException(
            f"result_type=<{type(converted).__name__}> | request converter must return a JSON object"
        )

    return converted
