from .auth_store import AuthStore
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    EmployeeConflictError,
    NotFoundError,
    OrderTrackingStateError,
    PermissionDeniedError,
    RateLimitError,
    RequestSupersededError,
    ServerError,
    TransportError,
    ValidationError,
)
from .http_client import HttpClient
from .models import PaginationMeta, SessionData, SortOrder, TokenResponse, UserResponse
from .models_employees import Employee, EmployeeQuery, EmployeeStatus, PermissionGrant
from .models_order_tracking import PaymentType, TrackingOrder, TrackingOrderQuery, TrackingStatus
from .models_roles import RoleTemplate
from .models_sales import BusinessProfile, Invoice, ReturnRecord, Sale, SaleLine, SaleQuery
from .order_tracking_state import TrackingActionAvailability, is_terminal, tracking_action_availability
from .permissions import duplicate_grant_keys, permission_count, toggle_action
from .session import ApiSession
from .totals import InvoiceTotals, compute_invoice_totals, compute_refund_amount
from .tracing import TraceContext
from .ui_errors import UserFacingError, to_user_facing_error
from .validation import ClientValidationError, ValidationIssue

__version__ = "0.4.0"

__all__ = [
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthStore",
    "BusinessProfile",
    "ClientConfig",
    "ClientValidationError",
    "ConfigError",
    "ConflictError",
    "Employee",
    "EmployeeConflictError",
    "EmployeeQuery",
    "EmployeeStatus",
    "HttpClient",
    "Invoice",
    "InvoiceTotals",
    "NotFoundError",
    "OrderTrackingStateError",
    "PaginationMeta",
    "PaymentType",
    "PermissionDeniedError",
    "PermissionGrant",
    "RateLimitError",
    "RequestSupersededError",
    "ReturnRecord",
    "RoleTemplate",
    "Sale",
    "SaleLine",
    "SaleQuery",
    "ServerError",
    "SessionData",
    "SortOrder",
    "TokenResponse",
    "TraceContext",
    "TrackingActionAvailability",
    "TrackingOrder",
    "TrackingOrderQuery",
    "TrackingStatus",
    "TransportError",
    "UserFacingError",
    "UserResponse",
    "ValidationError",
    "ValidationIssue",
    "compute_invoice_totals",
    "compute_refund_amount",
    "duplicate_grant_keys",
    "is_terminal",
    "load_config",
    "permission_count",
    "to_user_facing_error",
    "toggle_action",
    "tracking_action_availability",
]
