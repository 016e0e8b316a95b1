"""Async client for the DriveMe API, as used by the mobile app"""

import logging
from typing import Any, Dict, Generator, Optional

import httpx

from app.client.token_store import MemoryTokenStore, TokenStore

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5002/api"
DEFAULT_TIMEOUT = 10.0


class BearerTokenAuth(httpx.Auth):
    """Attach the stored session token to every request, if there is one"""

    def __init__(self, token_store: TokenStore):
        self.token_store = token_store

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        token = self.token_store.get()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request


async def _log_request(request: httpx.Request) -> None:
    logger.debug(f"Making request to: {request.url}")


async def _log_response(response: httpx.Response) -> None:
    if response.is_error:
        await response.aread()
        logger.error(
            "Response error",
            extra={
                "status_code": response.status_code,
                "url": str(response.request.url),
                "body": response.text[:500],
            },
        )


class DriveMeClient:
    """
    Thin wrapper over the HTTP API.

    Login and registration store the returned token; every later call sends
    it as a bearer token. Non-2xx responses raise ``httpx.HTTPStatusError``
    and transport failures raise ``httpx.RequestError``; both are logged.

    Example:
        ```python
        async with DriveMeClient("http://10.0.2.2:5002/api") as client:
            await client.login("ID-123", "secret")
            fines = await client.get_outstanding_fines()
        ```
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token_store: Optional[TokenStore] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_store = token_store or MemoryTokenStore()
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            auth=BearerTokenAuth(self.token_store),
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
            event_hooks={"request": [_log_request], "response": [_log_response]},
        )

    async def __aenter__(self) -> "DriveMeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, json: Any = None) -> Dict[str, Any]:
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.RequestError as exc:
            logger.error(
                "Network error - no response received",
                extra={"url": f"{self.base_url}{path}", "error": str(exc)},
            )
            raise
        response.raise_for_status()
        return response.json()

    def _remember_token(self, payload: Dict[str, Any]) -> None:
        token = payload.get("token")
        if token:
            self.token_store.set(token)

    # Auth

    async def register(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        payload = await self._request("POST", "/auth/register", json=user_data)
        self._remember_token(payload)
        return payload

    async def login(self, id_number: str, password: str) -> Dict[str, Any]:
        payload = await self._request(
            "POST", "/auth/login", json={"idNumber": id_number, "password": password}
        )
        self._remember_token(payload)
        return payload

    async def get_current_user(self) -> Dict[str, Any]:
        return await self._request("GET", "/auth/me")

    def logout(self) -> None:
        """Forget the session locally; tokens are stateless on the server."""
        self.token_store.clear()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token_store.get())

    # Fines

    async def get_all_fines(self) -> Dict[str, Any]:
        return await self._request("GET", "/fines")

    async def get_outstanding_fines(self) -> Dict[str, Any]:
        return await self._request("GET", "/fines/outstanding")

    async def get_fine_details(self, fine_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/fines/{fine_id}")

    async def dispute_fine(self, fine_id: str) -> Dict[str, Any]:
        return await self._request("PUT", f"/fines/{fine_id}", json={"status": "Disputed"})

    # Licenses

    async def get_license_details(self) -> Dict[str, Any]:
        return await self._request("GET", "/licenses")

    async def get_license_status(self) -> Dict[str, Any]:
        return await self._request("GET", "/licenses/status")

    async def request_renewal(self) -> Dict[str, Any]:
        return await self._request("POST", "/licenses/renewal-request")

    # Payments

    async def get_payment_history(self) -> Dict[str, Any]:
        return await self._request("GET", "/payments")

    async def pay_fine(self, fine_id: str, payment_method: str) -> Dict[str, Any]:
        return await self._request(
            "POST", f"/payments/fines/{fine_id}", json={"paymentMethod": payment_method}
        )

    async def get_payment_receipt(self, payment_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/payments/{payment_id}/receipt")

    async def test_server_connection(self) -> bool:
        """True when the server answers without a server error."""
        try:
            response = await self._http.get(self.base_url.rsplit("/api", 1)[0] + "/")
        except httpx.RequestError as exc:
            logger.error(f"Server connection test failed: {exc}")
            return False
        return response.status_code < 500
