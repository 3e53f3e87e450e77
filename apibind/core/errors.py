"""Error Hierarchy — typed, categorized exceptions for binding failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Configuration errors are CRITICAL and raised at registration time
    - Invocation errors are returned as the error half of an operate() pair,
      never raised by this package
    - to_response() produces a structured envelope for the serving layer

Design Decisions:
    - Single hierarchy with BindingError base: one except clause catches all
    - ErrorContext as dataclass: attribution fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    CONFIGURATION = "configuration"
    CONFLICT = "conflict"
    VALIDATION = "validation"
    INVOCATION = "invocation"
    CANCELLED = "cancelled"


@dataclass
class ErrorContext:
    """Attribution for an error: which operator, field or route raised it."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operator_kind: str | None = None
    field: str | None = None
    path: str | None = None
    method: str | None = None
    debug_info: dict[str, Any] | None = None


class BindingError(Exception):
    """Base exception for all apibind errors."""

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

    def to_response(self) -> dict:
        """Convert to standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operator_kind": self.context.operator_kind,
                    "field": self.context.field,
                    "path": self.context.path,
                    "method": self.context.method,
                },
            }
        }


# ─── Configuration Errors (registration time) ───────────────────

class ConfigurationError(BindingError):
    """Wiring bug detected while building descriptors. Aborts setup."""
    def __init__(
        self, message: str, code: str = "CONFIGURATION_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class OperatorSignatureError(ConfigurationError):
    """Function passed to operator_func does not have the operator shape."""
    def __init__(
        self, kind: str, message: str, code: str = "OPERATOR_SIGNATURE",
    ):
        super().__init__(
            f"Operator '{kind}': {message}", code,
            ErrorContext(operator_kind=kind),
        )
        self.kind = kind


class NotCallableError(OperatorSignatureError):
    def __init__(self, kind: str, value: object):
        super().__init__(
            kind, f"expected a function, got {type(value).__name__}",
            "OPERATOR_NOT_CALLABLE",
        )


class ArityError(OperatorSignatureError):
    def __init__(self, kind: str, count: int):
        super().__init__(
            kind, f"function must have 3 parameters, got {count}",
            "OPERATOR_ARITY",
        )
        self.count = count


class ContextParameterError(OperatorSignatureError):
    def __init__(self, kind: str, annotation: object):
        super().__init__(
            kind, f"first parameter must be a Context, got {annotation!r}",
            "OPERATOR_CONTEXT_PARAMETER",
        )


class FieldParameterError(OperatorSignatureError):
    def __init__(self, kind: str, annotation: object):
        super().__init__(
            kind, f"second parameter must be str, got {annotation!r}",
            "OPERATOR_FIELD_PARAMETER",
        )


class MissingAnnotationError(OperatorSignatureError):
    def __init__(self, kind: str, where: str):
        super().__init__(
            kind, f"{where} has no type annotation",
            "OPERATOR_MISSING_ANNOTATION",
        )


class ResultCountError(OperatorSignatureError):
    def __init__(self, kind: str, annotation: object):
        super().__init__(
            kind, f"function must return a 2-tuple, got {annotation!r}",
            "OPERATOR_RESULT_COUNT",
        )


class ErrorResultError(OperatorSignatureError):
    def __init__(self, kind: str, annotation: object):
        super().__init__(
            kind, f"second result must be an exception type, got {annotation!r}",
            "OPERATOR_ERROR_RESULT",
        )


class DuplicateRouteError(ConfigurationError):
    """Two definitions resolve to the same path and method."""
    def __init__(self, path: str, method: str | None = None):
        target = f"{method.upper()} {path}" if method else path
        super().__init__(
            f"Route '{target}' registered more than once",
            "DUPLICATE_ROUTE", ErrorContext(path=path, method=method),
        )
        self.path = path
        self.method = method


class InvalidContentTypeError(ConfigurationError):
    """Content type is outside the vocabulary or is the accept-only wildcard."""
    def __init__(self, content_type: str):
        super().__init__(
            f"'{content_type}' cannot be used as a request content type",
            "INVALID_CONTENT_TYPE",
        )
        self.content_type = content_type


# ─── Invocation Errors (request time, returned not raised) ──────

class InvocationError(BindingError):
    """Error produced by this package while invoking an operator."""
    def __init__(
        self, message: str, code: str,
        category: ErrorCategory = ErrorCategory.INVOCATION,
        context: ErrorContext | None = None, http_status: int = 400,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.ERROR, context, http_status,
        )


class ZeroValueError(InvocationError):
    """Declared input type has no zero value to substitute for an absent input."""
    def __init__(self, type_: object, kind: str | None = None, field: str | None = None):
        super().__init__(
            f"Type {type_!r} has no zero value",
            "NO_ZERO_VALUE", ErrorCategory.INVOCATION,
            ErrorContext(operator_kind=kind, field=field), 500,
        )
        self.type = type_


class ConversionError(InvocationError):
    """A standard converter could not convert the wire value."""
    def __init__(self, kind: str, field: str, value: object, reason: str):
        super().__init__(
            f"Field '{field}': cannot apply {kind} to {value!r}: {reason}",
            "CONVERSION_FAILED", ErrorCategory.VALIDATION,
            ErrorContext(operator_kind=kind, field=field), 400,
        )
        self.field = field
        self.value = value


class MissingParameterError(InvocationError):
    """A required parameter was absent from the request and has no default."""
    def __init__(self, field: str):
        super().__init__(
            f"Required parameter '{field}' is missing",
            "MISSING_PARAMETER", ErrorCategory.VALIDATION,
            ErrorContext(field=field), 400,
        )
        self.field = field


class CancelledError(InvocationError):
    """Context was cancelled before the operation could run."""
    def __init__(self, field: str | None = None):
        super().__init__(
            "Operation cancelled", "CANCELLED", ErrorCategory.CANCELLED,
            ErrorContext(field=field), 499,
        )
