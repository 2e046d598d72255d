"""Modrinth API レスポンスモデル（pydantic BaseModel）

API は仕様上 ``project_type``・``client_side``・``server_side`` などが列挙値の
いずれかに一致するとしているが、実際には一致しない値が返ることがある。
各列挙型は未知の値を ``UNKNOWN`` として受け入れる。
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, NonNegativeInt

from .base62 import Base62Id

T = TypeVar("T")


class _TolerantEnum(StrEnum):
    """未知の文字列を UNKNOWN にフォールバックする列挙型。

    文字列以外（null や数値）は受け入れず、検証エラーとして報告させる。
    """

    @classmethod
    def _missing_(cls, value: object) -> _TolerantEnum | None:
        if isinstance(value, str):
            return cls("unknown")
        return None


class ProjectType(_TolerantEnum):
    MOD = "mod"
    MODPACK = "modpack"
    RESOURCEPACK = "resourcepack"
    SHADER = "shader"
    UNKNOWN = "unknown"


class ProjectStatus(_TolerantEnum):
    APPROVED = "approved"
    ARCHIVED = "archived"
    REJECTED = "rejected"
    DRAFT = "draft"
    UNLISTED = "unlisted"
    PROCESSING = "processing"
    UNKNOWN = "unknown"


class SideSupport(_TolerantEnum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"


class VersionType(_TolerantEnum):
    ALPHA = "alpha"
    BETA = "beta"
    RELEASE = "release"
    UNKNOWN = "unknown"


class DependencyType(_TolerantEnum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    INCOMPATIBLE = "incompatible"
    UNKNOWN = "unknown"


class LoaderSupport(_TolerantEnum):
    FABRIC = "fabric"
    FORGE = "forge"
    QUILT = "quilt"
    UNKNOWN = "unknown"


class Page(BaseModel, Generic[T]):
    """検索エンドポイントの 1 ページ分のレスポンス。"""

    hits: list[T]
    offset: NonNegativeInt
    limit: NonNegativeInt
    total_hits: NonNegativeInt


class ProjectSearchResult(BaseModel):
    """検索結果の 1 件（hit）。"""

    project_id: Base62Id
    project_type: ProjectType
    slug: str | None = None
    author: str
    title: str
    description: str
    categories: list[str] = Field(default_factory=list)
    versions: list[str] = Field(default_factory=list)
    latest_version: str | None = None
    # 非負のはずだが API が -1 を返すことがあるため符号付き
    downloads: int
    follows: int
    icon_url: str = ""
    date_created: datetime
    date_modified: datetime
    license: str
    client_side: SideSupport
    server_side: SideSupport
    gallery: list[str] = Field(default_factory=list)


class ModeratorMessage(BaseModel):
    message: str
    body: str | None = None


class ProjectLicense(BaseModel):
    id: str
    name: str
    url: str | None = None


class DonationLink(BaseModel):
    id: str
    platform: str
    url: str


class GalleryItem(BaseModel):
    url: str
    featured: bool
    title: str | None = None
    description: str | None = None
    created: datetime


class Project(BaseModel):
    """プロジェクト詳細。"""

    id: Base62Id
    slug: str | None = None
    project_type: ProjectType
    team: Base62Id
    title: str
    description: str
    body: str
    published: datetime
    updated: datetime
    status: ProjectStatus
    moderator_message: ModeratorMessage | None = None
    license: ProjectLicense
    client_side: SideSupport
    server_side: SideSupport
    downloads: NonNegativeInt
    followers: NonNegativeInt
    categories: list[str] = Field(default_factory=list)
    versions: list[Base62Id] = Field(default_factory=list)
    icon_url: str | None = None
    issues_url: str | None = None
    source_url: str | None = None
    wiki_url: str | None = None
    discord_url: str | None = None
    donation_urls: list[DonationLink] | None = None
    gallery: list[GalleryItem] = Field(default_factory=list)


class FileHashes(BaseModel):
    """ファイルハッシュ。ハッシュ検索ではどちらか一方が必要。"""

    sha512: str | None = None
    sha1: str | None = None

    @classmethod
    def of_sha512(cls, value: str) -> FileHashes:
        return cls(sha512=value)

    @classmethod
    def of_sha1(cls, value: str) -> FileHashes:
        return cls(sha1=value)


class VersionFile(BaseModel):
    hashes: FileHashes
    url: str
    filename: str
    primary: bool


class VersionDependency(BaseModel):
    version_id: Base62Id | None = None
    project_id: Base62Id | None = None
    dependency_type: DependencyType


class ProjectVersion(BaseModel):
    """プロジェクトのバージョン。"""

    id: Base62Id
    project_id: Base62Id
    author_id: Base62Id
    featured: bool
    name: str
    version_number: str
    changelog: str | None = None
    date_published: datetime
    downloads: NonNegativeInt
    version_type: VersionType
    files: list[VersionFile] = Field(default_factory=list)
    dependencies: list[VersionDependency] = Field(default_factory=list)
    game_versions: list[str] = Field(default_factory=list)
    loaders: list[LoaderSupport] = Field(default_factory=list)
