"""ModrinthClient 抽象基底クラス"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .base62 import Base62Id
from .endpoints import ProjectIdentifier
from .models import FileHashes, Page, Project, ProjectSearchResult, ProjectVersion
from .pagination import SearchPaginator, SearchStream
from .query import SearchParams


class ModrinthClient(ABC):
    """Modrinth API クライアント抽象基底クラス。"""

    @abstractmethod
    def search_projects(self, params: SearchParams) -> Page[ProjectSearchResult]:
        """検索結果を 1 ページ取得する。"""
        ...

    @abstractmethod
    async def search_projects_async(self, params: SearchParams) -> Page[ProjectSearchResult]:
        ...

    @abstractmethod
    def search_projects_iter(self, params: SearchParams) -> SearchPaginator[ProjectSearchResult]:
        """全ページの検索結果を順に返すイテレータを生成する。"""
        ...

    @abstractmethod
    def search_projects_stream(self, params: SearchParams) -> SearchStream[ProjectSearchResult]:
        """全ページの検索結果を順に返す非同期イテレータを生成する。"""
        ...

    @abstractmethod
    def get_project(self, identifier: ProjectIdentifier) -> Project:
        ...

    @abstractmethod
    async def get_project_async(self, identifier: ProjectIdentifier) -> Project:
        ...

    @abstractmethod
    def get_project_versions(self, identifier: ProjectIdentifier) -> list[ProjectVersion]:
        ...

    @abstractmethod
    async def get_project_versions_async(
        self, identifier: ProjectIdentifier
    ) -> list[ProjectVersion]:
        ...

    @abstractmethod
    def get_version(self, version_id: Base62Id) -> ProjectVersion:
        ...

    @abstractmethod
    async def get_version_async(self, version_id: Base62Id) -> ProjectVersion:
        ...

    @abstractmethod
    def get_version_by_hash(self, hashes: FileHashes) -> ProjectVersion:
        """ファイルハッシュからバージョンを取得する。"""
        ...

    @abstractmethod
    async def get_version_by_hash_async(self, hashes: FileHashes) -> ProjectVersion:
        ...
