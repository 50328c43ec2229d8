"""Error Hierarchy — typed, categorized exceptions for every Paygate failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request/precondition errors are 4xx; downstream and storage errors are 5xx
    - to_response() produces the problem payload rendered by the API layer
    - Cross-user lookups surface as ResourceNotFoundError, never as a distinct error

Design Decisions:
    - Single hierarchy with PaygateError base: one FastAPI handler renders all of them
    - ErrorContext carries user_id/request_id so handlers can log without re-deriving them
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    PRECONDITION = "precondition"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Request-scoped context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    request_id: str | None = None
    transfer_id: str | None = None
    debug_info: dict[str, Any] | None = None


class PaygateError(Exception):
    """Base exception for all Paygate errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def retryable(self) -> bool:
        return False

    def to_response(self) -> dict:
        """Convert to the structured problem payload."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "request_id": self.context.request_id,
                    "transfer_id": self.context.transfer_id,
                    "retryable": self.retryable,
                },
            }
        }


# ─── Request Validation (400) ───────────────────────────────────

class RequestValidationFailure(PaygateError):
    """Malformed or incomplete input."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class MissingFieldsError(RequestValidationFailure):
    """One or more required transfer fields are blank."""
    def __init__(self, fields: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"missing {', '.join(fields)} JSON field(s)",
            "MISSING_FIELDS", context,
        )
        self.fields = fields


class EmptyRequestError(RequestValidationFailure):
    """Body held neither a transfer object nor a non-empty array of them."""
    def __init__(self, reason: str | None = None, context: ErrorContext | None = None):
        message = "no Transfer request objects found"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, "EMPTY_REQUEST", context)


class InvalidAmountError(RequestValidationFailure):
    """Amount is malformed, negative, or in an unknown currency."""
    def __init__(self, value: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"invalid Amount {value!r}: {reason}", "INVALID_AMOUNT", context,
        )
        self.value = value


class InvalidEnumValueError(RequestValidationFailure):
    """Text outside a closed enumeration."""
    def __init__(self, enum_name: str, value: str, context: ErrorContext | None = None):
        super().__init__(
            f"{enum_name}({value}) is invalid", "INVALID_ENUM_VALUE", context,
        )
        self.enum_name = enum_name
        self.value = value


class InvalidQueryParameterError(RequestValidationFailure):
    """A list filter query parameter could not be read."""
    def __init__(self, name: str, value: str, context: ErrorContext | None = None):
        super().__init__(
            f"invalid {name} query parameter {value!r}", "INVALID_QUERY_PARAMETER", context,
        )
        self.name = name
        self.value = value


class TransferValidationError(RequestValidationFailure):
    """A transfer row failed validation before it was written."""
    def __init__(
        self, originator: str, customer: str, description: str, reason: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"validation failed for transfer Originator={originator}, "
            f"Customer={customer}, Description={description}: {reason}",
            "TRANSFER_INVALID", context,
        )


class PartyValidationError(RequestValidationFailure):
    """A resolved Customer/Originator/Depository failed its own validate()."""
    def __init__(self, prefix: str, reason: str, context: ErrorContext | None = None):
        super().__init__(f"{prefix}: {reason}", "PARTY_INVALID", context)
        self.prefix = prefix


# ─── Preconditions (400) ────────────────────────────────────────

class PreconditionFailure(PaygateError):
    """An entity exists but is in a state that forbids the operation."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.PRECONDITION,
            ErrorSeverity.ERROR, context, 400,
        )


class DepositoryNotVerifiedError(PreconditionFailure):
    def __init__(
        self, label: str, depository_id: str, status: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{label} {depository_id} is in status {status}",
            "DEPOSITORY_NOT_VERIFIED", context,
        )
        self.depository_id = depository_id
        self.status = status


class CustomerNotVerifiedForPullError(PreconditionFailure):
    def __init__(
        self, customer_id: str, user_id: str, status: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"customer_id={customer_id!r} is not Verified "
            f"(status={status}) user_id={user_id!r}",
            "CUSTOMER_NOT_VERIFIED_FOR_PULL", context,
        )
        self.customer_id = customer_id
        self.status = status


class TransferNotPendingError(PreconditionFailure):
    def __init__(self, transfer_id: str, status: str, context: ErrorContext | None = None):
        super().__init__(
            f"transfer_id={transfer_id!r} is not Pending (status={status})",
            "TRANSFER_NOT_PENDING", context,
        )
        self.transfer_id = transfer_id
        self.status = status


# ─── Lookup / Identity ──────────────────────────────────────────

class ResourceNotFoundError(PaygateError):
    """Requested resource does not exist or is not owned by the caller."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class MissingUserIdError(PaygateError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "missing X-User-Id header", "MISSING_USER_ID",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 403,
        )


class IdempotentReplayError(PaygateError):
    """Idempotency key was already seen; nothing was done."""
    def __init__(self, key: str, context: ErrorContext | None = None):
        super().__init__(
            "X-Idempotency-Key has been seen before", "IDEMPOTENT_REPLAY",
            ErrorCategory.CONFLICT, ErrorSeverity.INFO, context, 412,
        )
        self.key = key


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ExternalServiceError(PaygateError):
    """A downstream HTTP service failed."""
    def __init__(
        self,
        service: str,
        message: str,
        code: str,
        retryable: bool = False,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{service} error: {message}", code, ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )
        self.service = service
        self._retryable = retryable

    @property
    def retryable(self) -> bool:
        return self._retryable


class AchServiceError(ExternalServiceError):
    """File create/build/validate/delete against the ACH service failed."""
    def __init__(
        self,
        message: str,
        retryable: bool = False,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            "ACH service", message, "ACH_SERVICE_ERROR", retryable, context,
        )
        self.status_code = status_code


class LedgerServiceError(ExternalServiceError):
    """Ledger posting failed. Logged by callers, never surfaced."""
    def __init__(
        self, message: str, retryable: bool = False, context: ErrorContext | None = None,
    ):
        super().__init__(
            "Ledger service", message, "LEDGER_SERVICE_ERROR", retryable, context,
        )


class DatabaseError(PaygateError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
