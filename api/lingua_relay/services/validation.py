import logging
import math
from typing import Any, Iterable, Type, TypeVar

from pydantic import BaseModel, ValidationError

from lingua_relay.errors import InvalidRequest

logger = logging.getLogger("lingua_relay")

RequestModel = TypeVar("RequestModel", bound=BaseModel)


def is_missing(value: Any) -> bool:
    """Absent, null, false, zero, NaN or the empty string count as not provided."""
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or math.isnan(value)
    return False


def parse_body(
    model: Type[RequestModel],
    body: Any,
    required: Iterable[str],
    missing_message: str,
) -> RequestModel:
    """Presence-check the raw JSON body by wire names, then validate it.

    Anything that is not a JSON object (an array, a text/plain payload, no
    body at all) carries no fields, so it fails the presence check.
    """
    fields = body if isinstance(body, dict) else {}
    if any(is_missing(fields.get(name)) for name in required):
        raise InvalidRequest(missing_message)
    try:
        return model.model_validate(fields)
    except ValidationError as e:
        logger.warning("Invalid %s body: %s", model.__name__, e.errors())
        raise InvalidRequest("Invalid request body") from e
