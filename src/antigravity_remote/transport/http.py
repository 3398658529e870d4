"""
CDP discovery client: GET /json/list and /json/version.
"""

from typing import Any, Optional

import httpx

from antigravity_remote.errors import DiscoveryUnavailable
from antigravity_remote.models.target import Target, VersionInfo

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 9222


class DiscoveryClient:
    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = f"http://{host}:{port}"
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"User-Agent": "antigravity-remote/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def get(self, path: str) -> Any:
        try:
            resp = await self._client.get(path)
        except httpx.HTTPError as e:
            raise DiscoveryUnavailable(
                f"CDP endpoint {self._base_url} unreachable: {e}",
                details={"url": f"{self._base_url}{path}"},
            ) from e
        if resp.status_code >= 400:
            raise DiscoveryUnavailable(
                f"HTTP {resp.status_code}: {resp.text[:200]}",
                details={"url": f"{self._base_url}{path}", "status": resp.status_code},
            )
        try:
            return resp.json()
        except ValueError as e:
            raise DiscoveryUnavailable(f"Invalid JSON from {path}: {e}") from e

    async def list_targets(self) -> list[Target]:
        data = await self.get("/json/list")
        if not isinstance(data, list):
            raise DiscoveryUnavailable(f"Unexpected /json/list payload: {type(data).__name__}")
        return [Target.model_validate(item) for item in data if isinstance(item, dict)]

    async def get_version(self) -> VersionInfo:
        return VersionInfo.model_validate(await self.get("/json/version"))

    async def close(self) -> None:
        await self._client.aclose()
