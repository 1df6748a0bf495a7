from .base import ServiceBase, ServiceError, normalize_error
from .business_service import BusinessProfileService
from .employees_service import EmployeesService
from .invoices_service import InvoicesService
from .order_tracking_service import OrderTrackingService, TrackingStats, tracking_stats
from .returns_service import ReturnsService
from .role_templates_service import RoleTemplatesService
from .sales_service import SalesService

__all__ = [
    "BusinessProfileService",
    "EmployeesService",
    "InvoicesService",
    "OrderTrackingService",
    "ReturnsService",
    "RoleTemplatesService",
    "SalesService",
    "ServiceBase",
    "ServiceError",
    "TrackingStats",
    "normalize_error",
    "tracking_stats",
]
