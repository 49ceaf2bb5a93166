"""Lead Provider API client.

A thin wrapper around the HTTP/JSON API that performs the same calls as
the web front-end: registration and login, the session probe, the
service catalog, the cart, checkout, order history and the admin review
of orders.  The client uses the ``requests`` library internally.

After :meth:`LeadProviderAPI.register` or :meth:`LeadProviderAPI.login`
succeeds, the returned token is kept on the client and sent as
``Authorization: Bearer <token>`` with every following request.
:meth:`LeadProviderAPI.logout` simply forgets it; tokens are not revoked
on the server.

Every operation returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or an empty list for list
operations) and ``error`` is a dictionary with keys ``status_code`` and
``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class LeadProviderAPI:
    """Client for the Lead Provider services API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``https://example.com``.
                The ``/api`` prefix is added by the client.
            token: Optional session token from an earlier login.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds for each request.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path below ``/api`` (e.g. ``/cart``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}/api{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}
        try:
            data = response.json() if response.content else None
        except ValueError:
            data = None
        if response.status_code >= 400:
            message = ""
            if isinstance(data, dict):
                message = data.get("message") or data.get("detail") or ""
            if not message:
                message = response.text or f"HTTP {response.status_code}"
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {"status_code": response.status_code, "message": message}
        return data, None

    def _list(self, method: str, path: str, json_body: Any | None = None) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request(method, path, json_body=json_body)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def register(self, email: str, password: str) -> Tuple[Optional[str], Optional[Error]]:
        """Create an account and keep the returned token."""
        return self._authenticate("/register", email, password)

    def login(self, email: str, password: str) -> Tuple[Optional[str], Optional[Error]]:
        return self._authenticate("/login", email, password)

    def _authenticate(self, path: str, email: str, password: str) -> Tuple[Optional[str], Optional[Error]]:
        data, error = self._request("POST", path, json_body={"email": email, "password": password})
        if error:
            return None, error
        self.token = data.get("token")
        return self.token, None

    def logout(self) -> None:
        self.token = None

    def check_session(self) -> Dict[str, Any]:
        """Return the session status; ``{"loggedIn": False}`` on any failure."""
        data, error = self._request("GET", "/session")
        if error or not isinstance(data, dict):
            return {"loggedIn": False}
        return data

    # ------------------------------------------------------------------
    # Catalog and cart
    # ------------------------------------------------------------------
    def list_services(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("GET", "/services")

    def get_cart(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("GET", "/cart")

    def add_to_cart(self, service_id: int) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Add a service and return the updated cart."""
        return self._list("POST", "/cart", {"serviceId": service_id})

    def remove_from_cart(self, service_id: int) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("DELETE", f"/cart/{service_id}")

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    def place_order(self, items: Optional[List[Dict[str, Any]]] = None) -> Tuple[Optional[int], Optional[Error]]:
        """Check out and return the new order ID.

        Args:
            items: Optional client-held cart (a list of service dicts with
                at least an ``id``).  When omitted the server-side cart is
                ordered.
        """
        body = {"items": items} if items is not None else None
        data, error = self._request("POST", "/orders", json_body=body)
        if error:
            return None, error
        return data.get("orderId"), None

    def list_orders(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("GET", "/orders")

    # ------------------------------------------------------------------
    # Admin review
    # ------------------------------------------------------------------
    def list_all_orders(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("GET", "/admin/orders")

    def set_order_status(self, order_id: int, status: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Approve or reject an order and return the updated order."""
        data, error = self._request("PUT", f"/admin/orders/{order_id}", json_body={"status": status})
        if error:
            return None, error
        return data.get("order"), None

    def health(self) -> bool:
        data, error = self._request("GET", "/health")
        return error is None and isinstance(data, dict) and data.get("status") == "ok"
