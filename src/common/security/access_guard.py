# File: common/security/access_guard.py

from typing import Any, Dict, Optional

from common.exceptions.base_exception import ForbiddenException, NotFoundException
from common.logging.logger import log_warning


def ensure_owned(document: Optional[Dict[str, Any]], actor_id: str, label: str, owner_field: str = "owner") -> Dict[str, Any]:
    """
    Existence first, then ownership.

    A missing document is reported as not found even when the actor would
    not have been allowed to touch it.
    """
    if not document:
        raise NotFoundException(detail=f"{label} not found.")
    if str(document.get(owner_field)) != str(actor_id):
        log_warning("Ownership check failed", extra={"entity_type": label.lower(), "entity_id": document.get("_id"), "actor_id": actor_id})
        raise ForbiddenException(detail=f"You do not have permission to modify this {label.lower()}.")
    return document
