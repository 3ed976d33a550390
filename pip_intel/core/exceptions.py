from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class AIError(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=503,
            error_code="AI_SERVICE_UNAVAILABLE",
            details=details
        )

class AIKillSwitchError(AppException):
    def __init__(self):
        super().__init__(
            message="AI services are currently offline for maintenance.",
            status_code=503,
            error_code="AI_KILL_SWITCH_ACTIVE"
        )

class PIPDateError(AppException):
    """Raised when a timed evaluation is requested for a PIP without a start date."""
    def __init__(self, pip_id: Optional[str] = None):
        super().__init__(
            message="PIP has no start date; day-based evaluation is not possible.",
            status_code=422,
            error_code="PIP_START_DATE_MISSING",
            details={"pip_id": pip_id} if pip_id else None
        )

class LexiconLoadError(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=500,
            error_code="LEXICON_INVALID",
            details=details
        )
