"""Multipart body encoding for audio uploads.

Builds the multipart bodies of the transcription and translation endpoints from typed parameters. Optional fields are
only emitted when set, and every non-file value is sent as text.
"""

import json
import logging
from typing import Any, Optional

from pydantic import BaseModel

from .._validation import validate_extra_body
from ..files import FileResolver
from ..types.audio import AudioTranscriptionParameters, AudioTranslationParameters
from ..types.media import MultipartForm

logger = logging.getLogger(__name__)

TRANSCRIPTION_FIELDS = ("prompt", "language", "chunking_strategy", "response_format", "stream", "temperature")
TRANSLATION_FIELDS = ("prompt", "response_format", "temperature")


def format_form_value(value: Any) -> str:
    """Format a value as the text of a multipart field.

    Strings are sent verbatim, nested models as compact JSON objects, and every other scalar in its JSON form (so
    booleans become "true" and "false").

    Args:
        value: The value to format.

    Returns:
        The field text.
    """
    if isinstance(value, str):
        return value

    if isinstance(value, BaseModel):
        return value.model_dump_json(exclude_none=True)

    return json.dumps(value)


def _add_optional_fields(form: MultipartForm, parameters: BaseModel, names: tuple[str, ...]) -> None:
    for name in names:
        value = getattr(parameters, name)
        if value is not None:
            form.text(name, format_form_value(value))


async def encode_transcription_form(
    parameters: AudioTranscriptionParameters, file_resolver: FileResolver
) -> MultipartForm:
    """Build the multipart body of a transcription request.

    `extra_body` is checked before the file is resolved, so a malformed extension map never triggers any I/O.

    Args:
        parameters: The transcription parameters.
        file_resolver: Resolver used to read the upload source.

    Returns:
        The multipart body.

    Raises:
        RequestValidationException: If `extra_body` is not a flat JSON object.
        FileResolutionException: If the upload source cannot be read.
    """
    extra_body: Optional[dict[str, Any]] = None
    if parameters.extra_body is not None:
        extra_body = validate_extra_body(parameters.extra_body)

    form = MultipartForm()
    form.part("file", await file_resolver.resolve(parameters.file))
    form.text("model", parameters.model)

    _add_optional_fields(form, parameters, TRANSCRIPTION_FIELDS)

    if parameters.timestamp_granularities is not None:
        form.text("timestamp_granularities", ",".join(parameters.timestamp_granularities))

    # Extension values are sent as their JSON text, strings included.
    for key, value in (extra_body or {}).items():
        form.text(key, json.dumps(value))

    logger.debug("parts=<%s> | encoded transcription form", form.names())
    return form


async def encode_translation_form(parameters: AudioTranslationParameters, file_resolver: FileResolver) -> MultipartForm:
    """Build the multipart body of a translation request.

    Args:
        parameters: The translation parameters.
        file_resolver: Resolver used to read the upload source.

    Returns:
        The multipart body.

    Raises:
        FileResolutionException: If the upload source cannot be read.
    """
    form = MultipartForm()
    form.part("file", await file_resolver.resolve(parameters.file))
    form.text("model", parameters.model)

    _add_optional_fields(form, parameters, TRANSLATION_FIELDS)

    logger.debug("parts=<%s> | encoded translation form", form.names())
    return form
