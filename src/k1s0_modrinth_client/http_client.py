"""Modrinth HTTP クライアント実装"""

from __future__ import annotations

import asyncio
from types import TracebackType

import httpx
import structlog

from .base62 import Base62Id
from .client import ModrinthClient
from .config import ModrinthConfig
from .endpoints import (
    ProjectIdentifier,
    project_path,
    project_versions_path,
    search_path,
    version_file_path,
    version_path,
)
from .executor import DecodingExecutor
from .models import FileHashes, Page, Project, ProjectSearchResult, ProjectVersion
from .pagination import SearchPaginator, SearchStream
from .query import SearchParams

logger = structlog.get_logger(__name__)


class HttpModrinthClient(ModrinthClient):
    """httpx を使った Modrinth HTTP クライアント。

    同期・非同期の httpx クライアント（ベース URL、既定ヘッダー、接続プール）を
    一つずつ保持し、そこから生成されるすべてのイテレータで共有する。
    非同期クライアントは最初の非同期呼び出しで生成する。

    イテレータを破棄してもクライアントは閉じない。``aclose()`` は両方の
    クライアントを閉じる。``close()`` は同期クライアントを閉じ、非同期
    クライアントが使われていればイベントループ外に限りそれも閉じる。
    イベントループ内では ``aclose()`` を使うこと。
    """

    def __init__(self, config: ModrinthConfig | None = None) -> None:
        self._config = config or ModrinthConfig()
        headers: dict[str, str] = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": self._config.user_agent,
        }
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"
        self._headers = headers
        self._http = httpx.Client(
            base_url=self._config.base_url,
            headers=self._headers,
            timeout=self._config.timeout_seconds,
        )
        self._async_http: httpx.AsyncClient | None = None
        self._executor = DecodingExecutor(self._http)

    @property
    def executor(self) -> DecodingExecutor:
        return self._executor

    def _ensure_async(self) -> DecodingExecutor:
        if self._async_http is None:
            self._async_http = httpx.AsyncClient(
                base_url=self._config.base_url,
                headers=self._headers,
                timeout=self._config.timeout_seconds,
            )
            self._executor.attach_async(self._async_http)
        return self._executor

    def search_projects(self, params: SearchParams) -> Page[ProjectSearchResult]:
        return self._executor.get(search_path(params), Page[ProjectSearchResult]).value

    async def search_projects_async(self, params: SearchParams) -> Page[ProjectSearchResult]:
        response = await self._ensure_async().get_async(
            search_path(params), Page[ProjectSearchResult]
        )
        return response.value

    def search_projects_iter(self, params: SearchParams) -> SearchPaginator[ProjectSearchResult]:
        return SearchPaginator(self._executor, params, ProjectSearchResult)

    def search_projects_stream(self, params: SearchParams) -> SearchStream[ProjectSearchResult]:
        return SearchStream(self._ensure_async(), params, ProjectSearchResult)

    def get_project(self, identifier: ProjectIdentifier) -> Project:
        return self._executor.get(project_path(identifier), Project).value

    async def get_project_async(self, identifier: ProjectIdentifier) -> Project:
        response = await self._ensure_async().get_async(project_path(identifier), Project)
        return response.value

    def get_project_versions(self, identifier: ProjectIdentifier) -> list[ProjectVersion]:
        path = project_versions_path(identifier)
        return self._executor.get(path, list[ProjectVersion]).value

    async def get_project_versions_async(
        self, identifier: ProjectIdentifier
    ) -> list[ProjectVersion]:
        path = project_versions_path(identifier)
        response = await self._ensure_async().get_async(path, list[ProjectVersion])
        return response.value

    def get_version(self, version_id: Base62Id | int) -> ProjectVersion:
        return self._executor.get(version_path(Base62Id(version_id)), ProjectVersion).value

    async def get_version_async(self, version_id: Base62Id | int) -> ProjectVersion:
        response = await self._ensure_async().get_async(
            version_path(Base62Id(version_id)), ProjectVersion
        )
        return response.value

    def get_version_by_hash(self, hashes: FileHashes) -> ProjectVersion:
        return self._executor.get(version_file_path(hashes), ProjectVersion).value

    async def get_version_by_hash_async(self, hashes: FileHashes) -> ProjectVersion:
        path = version_file_path(hashes)
        response = await self._ensure_async().get_async(path, ProjectVersion)
        return response.value

    def close(self) -> None:
        """同期クライアントと、使われていれば非同期クライアントを閉じる。"""
        self._http.close()
        if self._async_http is None or self._async_http.is_closed:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._async_http.aclose())
        else:
            logger.warning("async HTTP client left open; call aclose() inside an event loop")

    async def aclose(self) -> None:
        """両方のクライアントを閉じる。"""
        self._http.close()
        if self._async_http is not None:
            await self._async_http.aclose()

    def __enter__(self) -> HttpModrinthClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    async def __aenter__(self) -> HttpModrinthClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()
