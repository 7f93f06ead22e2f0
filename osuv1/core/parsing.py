"""\
Turning successful response bodies into entities.

Every failure keeps the raw body on the raised error so that
unexpected upstream output can be inspected.
"""
import json
import logging
from typing import Optional, Type, TypeVar

from pydantic import BaseModel

from osuv1.core.errors import InvalidMultiplayerMatch, ParsingError
from osuv1.schemas.fields import first_item
from osuv1.schemas.match import Match

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_body(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


def parse_list(body: bytes, model: Type[ModelT]) -> list[ModelT]:
    try:
        items = json.loads(body)
        if not isinstance(items, list):
            raise ValueError(f"expected an array, got {type(items).__name__}")
        return [model.model_validate(item) for item in items]
    except ValueError as e:
        raise ParsingError(decode_body(body), e) from e


def parse_first(body: bytes, model: Type[ModelT]) -> Optional[ModelT]:
    """Parse an array body and keep its first element, if any."""
    try:
        item = first_item(json.loads(body))
        return None if item is None else model.model_validate(item)
    except ValueError as e:
        raise ParsingError(decode_body(body), e) from e


def parse_match(body: bytes) -> Match:
    try:
        return Match.model_validate(json.loads(body))
    except ValueError as e:
        logger.debug(f"Could not parse match body: {e}")
        raise InvalidMultiplayerMatch(decode_body(body)) from e
