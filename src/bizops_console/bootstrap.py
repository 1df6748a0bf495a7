from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from bizops_client_sdk import ApiSession, ClientConfig, load_config

from .debounce import SearchDebouncer
from .services import (
    BusinessProfileService,
    EmployeesService,
    InvoicesService,
    OrderTrackingService,
    ReturnsService,
    RoleTemplatesService,
    SalesService,
    ServiceError,
    normalize_error,
)
from .state import AppState, StoreContext
from .stores import CollectionState, RecordState
from .telemetry import EventCategory, TelemetryLogger, build_event
from .view_state import ViewState, state_of
from .views import EmployeesListViewModel, RoleTemplatesListViewModel, TrackingOrdersListViewModel

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@dataclass
class BootstrapResult:
    authenticated: bool
    store_id: str | None = None
    error_message: str | None = None


class ConsoleBootstrap:
    """Wires the session, the current-store context and the per-screen services."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: ApiSession | None = None,
        *,
        telemetry: TelemetryLogger | None = None,
    ) -> None:
        self.config = config or load_config()
        self.session = session or ApiSession(self.config)
        self.store = StoreContext(self.session)
        self.state = AppState()
        self.telemetry = telemetry or TelemetryLogger()
        shared = {"telemetry": self.telemetry}
        self.employees = EmployeesService(self.session, self.store, **shared)
        self.role_templates = RoleTemplatesService(self.session, self.store, **shared)
        self.order_tracking = OrderTrackingService(self.session, self.store, **shared)
        self.sales = SalesService(self.session, self.store, **shared)
        self.returns = ReturnsService(self.session, self.store, **shared)
        self.invoices = InvoicesService(self.session, self.store, **shared)
        self.business = BusinessProfileService(self.session, self.store, **shared)

        self.employees_view = EmployeesListViewModel()
        self.role_templates_view = RoleTemplatesListViewModel()
        self.tracking_view = TrackingOrdersListViewModel()
        self.employee_search = SearchDebouncer(self.employees_view.set_search, delay_ms=self.config.search_debounce_ms)
        self.tracking_search = SearchDebouncer(self.tracking_view.set_search, delay_ms=self.config.search_debounce_ms)

    def start(self) -> BootstrapResult:
        if not self.session.is_authenticated:
            self.state.status_message = "Login required"
            return BootstrapResult(authenticated=False)
        self.state.user = self.session.user
        self.state.status_message = "Ready"
        return BootstrapResult(authenticated=True, store_id=self.store.store_id)

    def login(self, email: str, password: str) -> BootstrapResult:
        started = perf_counter()
        try:
            user = self.session.login(email, password)
        except Exception as exc:
            error = normalize_error(exc, "Login failed")
            self.state.error_message = error.message
            self._emit_auth("login", False, started, error)
            logger.warning("login_failed", extra={"error_code": error.code, "trace_id": error.trace_id})
            return BootstrapResult(authenticated=False, error_message=error.message)
        self.state.user = user
        self.state.error_message = None
        self._emit_auth("login", True, started)
        return BootstrapResult(authenticated=True, store_id=self.store.store_id)

    def logout(self) -> None:
        started = perf_counter()
        self.store.clear()
        try:
            self.session.logout()
        except Exception as exc:
            # The local session is gone either way.
            logger.warning("logout_request_failed", extra={"error": type(exc).__name__})
        self.state = AppState(status_message="Logged out")
        self._emit_auth("logout", True, started)

    def select_store(self, store_id: str) -> None:
        """Switch the current store and reload the store-scoped lists."""
        self.store.select(store_id)
        self.telemetry.emit(
            build_event(
                category=EventCategory.STORE,
                name="store_selected",
                module="console",
                action="select",
                store_id=store_id,
            )
        )
        for reload in (self.employees.fetch_employees, self.order_tracking.fetch_orders):
            try:
                reload()
            except ServiceError as exc:
                self.state.error_message = exc.message
        self.sync_views()

    def sync_views(self) -> None:
        self.employees_view.records = self.employees.state.items
        self.role_templates_view.records = self.role_templates.state.items
        self.tracking_view.records = self.order_tracking.state.items

    def screen_state(self, screen: str, *, can_view: bool = True) -> ViewState:
        container, empty_message, store_scoped = self._screens[screen]
        return state_of(
            container,
            can_view=can_view,
            store_selected=not store_scoped or self.store.store_id is not None,
            empty_message=empty_message,
        )

    @property
    def _screens(self) -> dict[str, tuple[CollectionState[Any] | RecordState[Any], str, bool]]:
        return {
            "employees": (self.employees.state, "No employees found", True),
            "role_templates": (self.role_templates.state, "No role templates found", False),
            "order_tracking": (self.order_tracking.state, "No orders in tracking", True),
            "sales": (self.sales.state, "No sales found", True),
            "returns": (self.returns.state, "No returns found", True),
            "invoices": (self.invoices.state, "No invoices found", True),
            "business": (self.business.state, "Business details not set up yet", False),
        }

    def _emit_auth(self, action: str, success: bool, started: float, error: ServiceError | None = None) -> None:
        self.telemetry.emit(
            build_event(
                category=EventCategory.AUTH,
                name=f"auth_{action}_result",
                module="auth",
                action=action,
                success=success,
                duration_ms=int((perf_counter() - started) * 1000),
                trace_id=error.trace_id if error else None,
                error_code=error.code if error else None,
            )
        )
