# File: common/base_service/base_service.py
from abc import ABC
from typing import Any, Awaitable, Callable, Dict

import sentry_sdk

from common.exceptions.base_exception import (
    AppHTTPException,
    InternalServerErrorException,
    ServiceUnavailableException,
)
from common.exceptions.error_handlers import handle_db_error, handle_general_error
from common.logging.logger import log_info, log_warning


class BaseService(ABC):
    async def execute(self, operation: Callable[[], Awaitable[Any]], context: Dict[str, Any]):
        try:
            result = await operation()
            log_info(f"{context.get('action', 'Operation')} executed successfully", extra=context)
            return result
        except ServiceUnavailableException as db_exc:
            handle_db_error(db_exc, context)
            raise
        except AppHTTPException as app_exc:
            log_warning(f"{context.get('action', 'Operation')} rejected",
                        extra={**context, "error": str(app_exc.detail), "error_code": app_exc.error_code})
            if app_exc.status_code >= 500:
                sentry_sdk.capture_exception(app_exc)
            raise
        except Exception as e:
            handle_general_error(e, context)
            raise InternalServerErrorException(detail="Internal server error") from e
