from .employee_view import EMPLOYEE_LIST_CONFIG, EmployeesListViewModel
from .list_view import ListViewModel
from .order_tracking_view import TRACKING_LIST_CONFIG, TrackingOrdersListViewModel
from .role_templates_view import ROLE_TEMPLATE_LIST_CONFIG, RoleTemplatesListViewModel

__all__ = [
    "EMPLOYEE_LIST_CONFIG",
    "ROLE_TEMPLATE_LIST_CONFIG",
    "TRACKING_LIST_CONFIG",
    "EmployeesListViewModel",
    "ListViewModel",
    "RoleTemplatesListViewModel",
    "TrackingOrdersListViewModel",
]
