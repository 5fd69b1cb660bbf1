# File: common/utils/validation.py

from typing import Any, Optional

from bson import ObjectId

from common.exceptions.base_exception import BadRequestException, InvalidIdentifierException


def is_valid_object_id(value: Any) -> bool:
    return isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value)


def ensure_object_id(value: Any, label: str = "id") -> str:
    """
    Fail closed on anything that is not a 24 character hex ObjectId string.

    Returns the identifier unchanged so callers can validate inline.
    """
    if not is_valid_object_id(value):
        raise InvalidIdentifierException(detail=f"Invalid {label}.")
    return value


def require_text(value: Optional[str], label: str) -> str:
    if value is None or not str(value).strip():
        raise BadRequestException(detail=f"{label} is required.")
    return str(value).strip()
