"""検索パラメータとクエリ文字列エンコーダ"""

from __future__ import annotations

import json
from enum import StrEnum
from typing import Any
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, NonNegativeInt, PositiveInt, model_serializer

# 外側のリストは OR、内側のリストは AND で結合される。
SearchFilters = list[list[str]]


class SearchFacet(BaseModel):
    """検索ファセット。``name:'value'`` としてエンコードされる。

    <https://docs.modrinth.com/docs/tutorials/api_search/#facets>
    """

    model_config = ConfigDict(frozen=True)

    name: str
    value: str

    @classmethod
    def category(cls, value: str) -> SearchFacet:
        return cls(name="categories", value=value)

    @classmethod
    def version(cls, value: str) -> SearchFacet:
        return cls(name="versions", value=value)

    @classmethod
    def license(cls, value: str) -> SearchFacet:
        return cls(name="license", value=value)

    @classmethod
    def project_type(cls, value: str) -> SearchFacet:
        return cls(name="project_type", value=value)

    @classmethod
    def custom(cls, name: str, value: str) -> SearchFacet:
        return cls(name=name, value=value)

    def __str__(self) -> str:
        return f"{self.name}:'{self.value}'"

    @model_serializer
    def serialize_facet(self) -> str:
        return str(self)


class SearchIndex(StrEnum):
    """検索結果のソート順。"""

    RELEVANCE = "relevance"
    DOWNLOADS = "downloads"
    FOLLOWS = "follows"
    NEWEST = "newest"
    UPDATED = "updated"


class SearchParams(BaseModel):
    """プロジェクト検索パラメータ。

    ``None`` のフィールドはクエリ文字列から省かれる。offset は 0 以上、limit は
    1 以上でなければならず、範囲外の値は構築時に ValidationError となる。
    """

    query: str | None = None
    facets: list[list[SearchFacet]] | None = None
    index: SearchIndex | None = None
    offset: NonNegativeInt | None = None
    limit: PositiveInt | None = None
    filters: SearchFilters | None = None


def _to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def to_query_string(params: BaseModel) -> str:
    """パラメータモデルを URL エンコード済みのクエリ文字列に変換する。

    各フィールドの値はその JSON 表現（文字列は引用符付き、リストはコンパクトな
    JSON テキスト）になる。API は明示的な null と未指定を区別するため、
    ``None`` のフィールドは出力しない。

    Raises:
        TypeError: モデルが JSON オブジェクトとして表現できない場合（プログラミングエラー）
    """
    data = params.model_dump(mode="json")
    if not isinstance(data, dict):
        raise TypeError(f"expected {type(params).__name__} to serialize to a JSON object")
    pairs = [(key, _to_json(value)) for key, value in data.items() if value is not None]
    return urlencode(pairs)
