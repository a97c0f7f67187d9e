"""Async HTTP client for the activity log endpoints."""

from __future__ import annotations

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from restro_admin.core.config import settings
from restro_admin.schemas.activity_log import ActivityFacetsOut, ActivityLogPageOut
from restro_admin.services.activity_log import ActivityLogError, InvalidArgument, StorageUnavailable

_M = TypeVar("_M", bound=BaseModel)


class NotAuthenticated(ActivityLogError):
    pass


class ActivityLogClient:
    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout if timeout is not None else settings.activity_log_client_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> ActivityLogClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get(self, path: str, model: type[_M], params: dict[str, Any] | None = None) -> _M:
        try:
            r = await self._http.get(path, params=params)
        except httpx.TimeoutException as e:
            raise StorageUnavailable(f"activity log request timed out: {path}") from e
        except httpx.HTTPError as e:
            raise StorageUnavailable(f"activity log request failed: {e}") from e

        if r.status_code == 401:
            raise NotAuthenticated(_detail(r))
        if r.status_code in (400, 422):
            raise InvalidArgument(_detail(r))
        if r.status_code != 200:
            raise StorageUnavailable(f"activity log request failed: {r.status_code} {r.text[:200]}")
        try:
            return model.model_validate(r.json())
        except ValueError as e:
            # Undecodable JSON or a body that does not match the schema.
            raise StorageUnavailable(f"unexpected activity log response from {path}") from e

    async def list_facets(self) -> ActivityFacetsOut:
        return await self._get("/activity-logs/filters", ActivityFacetsOut)

    async def list_entries(
        self,
        *,
        module: str = "",
        sub_module: str = "",
        page_index: int = 0,
        page_size: int = 10,
    ) -> ActivityLogPageOut:
        # The wire page number is 1-based.
        params: dict[str, Any] = {"page": page_index + 1, "limit": page_size}
        if module:
            params["module"] = module
        if sub_module:
            params["subModule"] = sub_module
        return await self._get("/activity-logs/", ActivityLogPageOut, params=params)


def _detail(r: httpx.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text[:200]
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)[:200]
