"""
Inventory API client.

Thin typed wrapper over the inventory REST API. Authenticated calls carry
the bearer token held by the session; failures surface as InventoryApiError.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
import structlog
from httpx import HTTPStatusError, TimeoutException

from inventory_client.core.config import ApiConfig
from inventory_client.core.exceptions import InventoryApiError
from inventory_client.core.models import LoginResponse
from inventory_client.session.state import SessionState

logger = structlog.get_logger(__name__)


class InventoryApiClient:
    """
    Client for the categories, suppliers, products and transactions endpoints.
    """

    def __init__(
        self,
        config: ApiConfig,
        session: SessionState,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config = config
        self.session = session
        self.client = httpx.Client(
            base_url=config.base_url,
            timeout=httpx.Timeout(config.request_timeout),
            follow_redirects=True,
            transport=transport,
        )

        logger.debug("Inventory API client initialized", base_url=config.base_url)

    def close(self) -> None:
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _get_headers(self) -> Dict[str, str]:
        """Get the Authorization header for the current session."""
        token = self.session.token
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def _make_request(
        self,
        method: str,
        path: str,
        json_data: Any = None,
        params: Optional[Dict[str, Any]] = None,
        authenticated: bool = True,
        content: Optional[str] = None,
        extra_headers: Optional[Dict[str, str]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Make a request to the inventory API.

        Args:
            method: HTTP method
            path: API path relative to the base URL
            json_data: JSON payload
            params: Query parameters
            authenticated: Send the session's bearer token
            content: Raw request body, used instead of ``json_data``
            extra_headers: Additional request headers
            files: Multipart form parts

        Returns:
            Response JSON data

        Raises:
            InventoryApiError: On HTTP, transport or decoding errors
        """
        headers = self._get_headers() if authenticated else {}
        if extra_headers:
            headers.update(extra_headers)

        try:
            logger.debug("Making inventory API request", method=method, path=path)

            response = self.client.request(
                method=method,
                url=path,
                json=json_data if content is None else None,
                content=content,
                files=files,
                params=params,
                headers=headers,
            )
            response.raise_for_status()
            return response.json()

        except HTTPStatusError as e:
            message = _server_message(e.response) or f"HTTP {e.response.status_code}"
            logger.error(
                "Inventory API HTTP error",
                status_code=e.response.status_code,
                path=path,
                message=message,
            )
            raise InventoryApiError(
                message, status_code=e.response.status_code, details={"path": path}
            ) from e

        except TimeoutException as e:
            logger.error("Inventory API timeout", path=path, error=str(e))
            raise InventoryApiError(f"Inventory API timeout: {e}", details={"path": path}) from e

        except httpx.HTTPError as e:
            logger.error("Inventory API transport error", path=path, error=str(e))
            raise InventoryApiError(f"Inventory API unreachable: {e}", details={"path": path}) from e

        except ValueError as e:
            logger.error("Inventory API returned invalid JSON", path=path, error=str(e))
            raise InventoryApiError(
                "Inventory API returned invalid JSON", details={"path": path}
            ) from e

    # Authentication and users

    def register_user(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._make_request("POST", "/auth/register", json_data=body, authenticated=False)

    def login_user(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._make_request("POST", "/auth/login", json_data=body, authenticated=False)

    def login(self, email: str, password: str) -> LoginResponse:
        """Authenticate and store the returned credentials in the session."""
        payload = self.login_user({"email": email, "password": password})
        return self.session.login_from_response(payload)

    def get_logged_in_user_info(self) -> Dict[str, Any]:
        return self._make_request("GET", "/users/current")

    # Categories

    def create_category(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._make_request("POST", "/categories/add", json_data=body)

    def get_all_categories(self) -> Dict[str, Any]:
        return self._make_request("GET", "/categories/all")

    def get_category_by_id(self, category_id: str) -> Dict[str, Any]:
        return self._make_request("GET", f"/categories/{category_id}")

    def update_category(self, category_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._make_request("PUT", f"/categories/update/{category_id}", json_data=body)

    def delete_category(self, category_id: str) -> Dict[str, Any]:
        return self._make_request("DELETE", f"/categories/delete/{category_id}")

    # Suppliers

    def add_supplier(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._make_request("POST", "/suppliers/add", json_data=body)

    def get_all_suppliers(self) -> Dict[str, Any]:
        return self._make_request("GET", "/suppliers/all")

    def get_supplier_by_id(self, supplier_id: str) -> Dict[str, Any]:
        return self._make_request("GET", f"/suppliers/{supplier_id}")

    def update_supplier(self, supplier_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._make_request("PUT", f"/suppliers/update/{supplier_id}", json_data=body)

    def delete_supplier(self, supplier_id: str) -> Dict[str, Any]:
        return self._make_request("DELETE", f"/suppliers/delete/{supplier_id}")

    # Products

    def add_product(self, fields: Dict[str, Any], image: Optional[Path] = None) -> Dict[str, Any]:
        return self._make_request("POST", "/products/add", files=_product_form(fields, image))

    def update_product(
        self, product_id: str, fields: Dict[str, Any], image: Optional[Path] = None
    ) -> Dict[str, Any]:
        form = _product_form({**fields, "productId": product_id}, image)
        return self._make_request("PUT", "/products/update", files=form)

    def get_all_products(self) -> Dict[str, Any]:
        return self._make_request("GET", "/products/all")

    def get_product_by_id(self, product_id: str) -> Dict[str, Any]:
        return self._make_request("GET", f"/products/{product_id}")

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        return self._make_request("DELETE", f"/products/delete/{product_id}")

    # Transactions

    def purchase_product(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._make_request("POST", "/transactions/purchase", json_data=body)

    def sell_product(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._make_request("POST", "/transactions/sell", json_data=body)

    def get_all_transactions(self, search_text: str = "") -> Dict[str, Any]:
        return self._make_request(
            "GET", "/transactions/all", params={"searchText": search_text}
        )

    def get_transaction_by_id(self, transaction_id: str) -> Dict[str, Any]:
        return self._make_request("GET", f"/transactions/{transaction_id}")

    def update_transaction_status(self, transaction_id: str, status: str) -> Dict[str, Any]:
        # The endpoint takes a bare JSON string body.
        return self._make_request(
            "PUT",
            f"/transactions/update/{transaction_id}",
            content=json.dumps(status),
            extra_headers={"Content-Type": "application/json"},
        )

    def get_transactions_by_month_and_year(self, month: int, year: int) -> Dict[str, Any]:
        return self._make_request(
            "GET", "/transactions/by-month-year", params={"month": month, "year": year}
        )


def _product_form(fields: Dict[str, Any], image: Optional[Path]) -> Dict[str, Any]:
    """Products travel as multipart form data, with an optional image file."""
    form: Dict[str, Any] = {
        key: (None, str(value)) for key, value in fields.items() if value is not None
    }
    if image is not None:
        form["imageFile"] = (image.name, image.read_bytes())
    return form


def _server_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("message")
    return None


def create_api_client(
    config: ApiConfig, session: SessionState, transport: Optional[httpx.BaseTransport] = None
) -> InventoryApiClient:
    """
    Factory function to create the inventory API client.

    Args:
        config: API configuration
        session: Session supplying the bearer token
        transport: Optional httpx transport (tests pass a MockTransport)

    Returns:
        Configured API client
    """
    return InventoryApiClient(config, session, transport)
