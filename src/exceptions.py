"""
Standardized exception hierarchy for vibe-task
Provides rich context, consistent logging, and user-friendly error messages

Ordinary domain conditions (unknown task id, task already completed) are not
errors; the incentive engine signals them by returning None. These exceptions
are reserved for contract violations by the caller.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


class VibeTaskError(Exception):
    """
    Base exception for all vibe-task errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise VibeTaskError(
            message="Snapshot could not be processed",
            operation="process_task_completion",
            context={"task_id": "t1"}
        )
    """

    def __init__(
        self,
        message: str,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "Something went wrong with your mission log."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # Avoid conflict with logging's 'message' field
            "request_id": self.request_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for presentation layers"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Validation Errors (Caller Input)
# ==========================================

class ValidationError(VibeTaskError):
    """
    Raised when caller input fails validation

    Example:
        raise ValidationError(
            message="Time step must not be negative",
            field="ms",
            value=-5
        )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        kwargs.setdefault("user_message", f"Invalid {field}: {message}" if field else message)
        kwargs.setdefault("context", {"field": field, "value": value})
        super().__init__(message=message, **kwargs)


class InvalidSnapshotError(ValidationError):
    """Progression snapshot breaks a progression invariant"""

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[Any] = None, **kwargs):
        super().__init__(
            message=message,
            field=field,
            value=value,
            user_message="Your saved progression is corrupted and cannot be used.",
            **kwargs
        )


class InvalidTaskError(ValidationError):
    """Task record cannot be scored"""

    def __init__(
        self,
        message: str,
        task_id: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.task_id = task_id
        super().__init__(
            message=message,
            field="base_xp",
            value=value,
            user_message="This mission has an invalid reward and cannot be completed.",
            context={"task_id": task_id, "base_xp": value},
            **kwargs
        )


class DuplicateTaskError(ValidationError):
    """Task id already present in the session"""

    def __init__(self, message: str, task_id: Optional[str] = None, **kwargs):
        self.task_id = task_id
        super().__init__(
            message=message,
            field="id",
            value=task_id,
            user_message="That mission is already on your board.",
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(VibeTaskError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The system is not properly configured. Please check your environment.",
            context={"config_key": config_key},
            **kwargs
        )
