"""HTTP client for the portfolio API, used by the admin dashboard."""

from typing import Any, Dict, List, Optional
import httpx


class PortfolioApiClient:
    """Thin synchronous wrapper around the /api/v1 endpoints.

    Records are exchanged as plain dicts with camelCase keys, exactly as
    the API serialises them. Every failed request raises ``httpx.HTTPError``.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.Client:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        return httpx.Client(
            base_url=f"{self.base_url}/api/v1",
            headers=headers,
            timeout=self.timeout,
            transport=self.transport,
        )

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        with self._client() as client:
            response = client.request(method, path, **kwargs)
            response.raise_for_status()
            if response.status_code == 204 or not response.content:
                return None
            return response.json()

    def login(self, email: str, password: str) -> str:
        """Sign in and keep the issued token for later requests."""
        result = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = result["access_token"]
        return self.token

    def logout(self) -> None:
        if self.token:
            self._request("POST", "/auth/logout")
        self.token = None

    def health(self) -> Dict[str, Any]:
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            response = client.get(f"{self.base_url}/health")
            response.raise_for_status()
            return response.json()

    def list_records(self, collection: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/{collection}")

    def add_record(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", f"/{collection}", json=data)

    def update_record(self, collection: str, record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/{collection}/{record_id}", json=data)

    def delete_record(self, collection: str, record_id: str) -> None:
        self._request("DELETE", f"/{collection}/{record_id}")

    def get_profile(self) -> Dict[str, Any]:
        return self._request("GET", "/profile")

    def update_profile(self, profile: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", "/profile", json=profile)

    def next_category_order(self) -> int:
        return self._request("GET", "/skill-categories/next-order")["order"]

    def move_category(self, category_id: str, direction: str) -> List[Dict[str, Any]]:
        return self._request(
            "POST", f"/skill-categories/{category_id}/move", json={"direction": direction}
        )

    def list_sections(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/sections")

    def set_section_visibility(self, section_id: str, visible: bool) -> Dict[str, Any]:
        return self._request("PUT", f"/sections/{section_id}", json={"visible": visible})

    def upload(self, folder: str, filename: str, content: bytes) -> str:
        """Upload a file into ``folder`` and return its public URL."""
        result = self._request(
            "POST",
            "/uploads",
            data={"folder": folder},
            files={"file": (filename, content)},
        )
        return result["url"]
