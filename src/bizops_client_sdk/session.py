from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .auth_store import AuthStore
from .clients.auth import AuthClient
from .clients.business_client import BusinessProfileClient
from .clients.employees_client import EmployeesClient
from .clients.invoices_client import InvoicesClient
from .clients.order_tracking_client import OrderTrackingClient
from .clients.returns_client import ReturnsClient
from .clients.roles_client import RoleTemplatesClient
from .clients.sales_client import SalesClient
from .config import ClientConfig
from .http_client import HttpClient
from .models import SessionData, TokenResponse, UserResponse
from .tracing import TraceContext

logger = logging.getLogger(__name__)


@dataclass
class ApiSession:
    """Authenticated entry point that hands out resource clients.

    All clients share one :class:`HttpClient`, so request sequencing contexts
    opened through :meth:`HttpClient.switch_context` apply across them.
    """

    config: ClientConfig
    auth_store: AuthStore | None = None
    trace: TraceContext | None = None
    token: str | None = None
    user: UserResponse | None = None
    current_store_id: str | None = None
    http: HttpClient | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore()
        self.trace = self.trace or TraceContext()
        self.http = self.http or HttpClient(config=self.config, trace=self.trace)
        stored = self.auth_store.load()
        if stored and not self.token:
            self.token = stored.access_token
            self.user = stored.user
            self.current_store_id = self.current_store_id or stored.current_store_id

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def _client_args(self) -> dict:
        return {"http": self.http, "access_token": self.token, "store_id": self.current_store_id}

    def auth_client(self) -> AuthClient:
        return AuthClient(**self._client_args())

    def employees_client(self) -> EmployeesClient:
        return EmployeesClient(**self._client_args())

    def role_templates_client(self) -> RoleTemplatesClient:
        return RoleTemplatesClient(**self._client_args())

    def sales_client(self) -> SalesClient:
        return SalesClient(**self._client_args())

    def returns_client(self) -> ReturnsClient:
        return ReturnsClient(**self._client_args())

    def invoices_client(self) -> InvoicesClient:
        return InvoicesClient(**self._client_args())

    def order_tracking_client(self) -> OrderTrackingClient:
        return OrderTrackingClient(**self._client_args())

    def business_client(self) -> BusinessProfileClient:
        return BusinessProfileClient(**self._client_args())

    def login(self, email: str, password: str) -> UserResponse | None:
        token = self.auth_client().login(email, password)
        self.establish(token, token.user)
        return self.user

    def establish(self, token: TokenResponse, user: UserResponse | None) -> None:
        self.token = token.token
        self.user = user
        if self.current_store_id is None and user and user.store_ids:
            self.current_store_id = user.store_ids[0]
        self._persist()

    def select_store(self, store_id: str | None) -> None:
        self.current_store_id = store_id
        if self.token:
            self._persist()
        logger.info("store_selected", extra={"store_id": store_id})

    def logout(self) -> None:
        try:
            if self.token:
                self.auth_client().logout()
        finally:
            self.clear()

    def clear(self) -> None:
        self.token = None
        self.user = None
        self.current_store_id = None
        if self.auth_store:
            self.auth_store.clear()

    def _persist(self) -> None:
        if not self.token or self.auth_store is None:
            return
        self.auth_store.save(
            SessionData(
                access_token=self.token,
                user=self.user,
                env_name=self.config.env_name,
                current_store_id=self.current_store_id,
            )
        )
