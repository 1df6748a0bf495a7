from .auth import AuthClient
from .business_client import BusinessProfileClient
from .employees_client import EmployeesClient
from .invoices_client import InvoicesClient
from .order_tracking_client import OrderTrackingClient
from .returns_client import ReturnsClient
from .roles_client import RoleTemplatesClient
from .sales_client import SalesClient

__all__ = [
    "AuthClient",
    "BusinessProfileClient",
    "EmployeesClient",
    "InvoicesClient",
    "OrderTrackingClient",
    "ReturnsClient",
    "RoleTemplatesClient",
    "SalesClient",
]
