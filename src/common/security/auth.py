# File: common/security/auth.py

from fastapi import Request

from common.exceptions.base_exception import AppHTTPException
from common.logging.logger import log_warning
from common.utils.validation import is_valid_object_id

# Set by the upstream auth gateway after it has verified the session.
ACTOR_HEADER = "X-User-Id"


async def get_current_actor(request: Request) -> str:
    actor_id = request.headers.get(ACTOR_HEADER)
    if not actor_id or not is_valid_object_id(actor_id):
        log_warning("Request without a trusted actor id", extra={"path": request.url.path})
        raise AppHTTPException(status_code=401, detail="Authenticated user required.", error_code="UNAUTHENTICATED")
    return actor_id
