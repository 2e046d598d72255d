"""Modrinth API エンドポイントのパス組み立て"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from .base62 import Base62Id
from .exceptions import InputError
from .models import FileHashes
from .query import SearchParams, to_query_string

DEFAULT_API_BASE = "https://api.modrinth.com/v2/"

SEARCH_PATH = "search"


@dataclass(frozen=True)
class ProjectIdentifier:
    """プロジェクトの識別子。ID（base62）またはスラッグのどちらか。"""

    value: Base62Id | str

    @classmethod
    def id(cls, value: Base62Id | int) -> ProjectIdentifier:
        return cls(value if isinstance(value, Base62Id) else Base62Id(value))

    @classmethod
    def slug(cls, value: str) -> ProjectIdentifier:
        return cls(value)

    def __str__(self) -> str:
        return str(self.value)


def search_path(params: SearchParams) -> str:
    query = to_query_string(params)
    return f"{SEARCH_PATH}?{query}" if query else SEARCH_PATH


def _segment(value: object) -> str:
    """値を 1 つのパスセグメントとしてエスケープする。

    Raises:
        InputError: 空文字列、または "." / ".." の場合
    """
    text = str(value)
    if text in ("", ".", ".."):
        raise InputError(f"{text!r} is not a valid path segment")
    return quote(text, safe="")


def project_path(identifier: ProjectIdentifier) -> str:
    return f"project/{_segment(identifier)}"


def project_versions_path(identifier: ProjectIdentifier) -> str:
    return f"project/{_segment(identifier)}/version"


def version_path(version_id: Base62Id) -> str:
    return f"version/{version_id}"


def version_file_path(hashes: FileHashes) -> str:
    """ハッシュ検索のパス。sha512 を優先し、なければ sha1 を使う。

    Raises:
        InputError: どちらのハッシュも指定されていない場合
    """
    if hashes.sha512:
        return f"version_file/{_segment(hashes.sha512)}?algorithm=sha512"
    if hashes.sha1:
        return f"version_file/{_segment(hashes.sha1)}?algorithm=sha1"
    raise InputError("the provided FileHashes must have at least one hash set")
