"""テスト共通ヘルパーとフィクスチャ"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest
from k1s0_modrinth_client.base62 import encode
from k1s0_modrinth_client.config import ModrinthConfig
from k1s0_modrinth_client.http_client import HttpModrinthClient

BASE_URL = "https://api.modrinth.test/v2"
SEARCH_URL = f"{BASE_URL}/search"


def make_hit(n: int, **overrides: Any) -> dict[str, Any]:
    """検索結果 1 件分の JSON を生成する。project_id は 1000 + n。"""
    hit: dict[str, Any] = {
        "project_id": encode(1000 + n),
        "project_type": "mod",
        "slug": f"mod-{n}",
        "author": "alice",
        "title": f"Mod {n}",
        "description": f"description {n}",
        "categories": ["utility"],
        "versions": ["1.20.1"],
        "latest_version": "1.20.1",
        "downloads": 10 * n,
        "follows": n,
        "icon_url": "",
        "date_created": "2023-01-01T00:00:00Z",
        "date_modified": "2023-06-01T12:30:00Z",
        "license": "MIT",
        "client_side": "required",
        "server_side": "optional",
        "gallery": [],
    }
    hit.update(overrides)
    return hit


def search_handler(
    hits: list[dict[str, Any]],
    total: int | None = None,
    max_page: int | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """offset/limit に従って hits を切り出す検索エンドポイントのモック。

    Args:
        hits: サーバー側の全件
        total: 報告する total_hits（省略時は len(hits)）
        max_page: サーバー側で 1 ページに返す最大件数（切り詰めの再現用）
    """

    def handler(request: httpx.Request) -> httpx.Response:
        offset = int(request.url.params.get("offset", "0"))
        limit = int(request.url.params.get("limit", "10"))
        size = min(limit, max_page) if max_page is not None else limit
        return httpx.Response(
            200,
            json={
                "hits": hits[offset : offset + size],
                "offset": offset,
                "limit": limit,
                "total_hits": len(hits) if total is None else total,
            },
        )

    return handler


def requested_pages(route: Any) -> list[tuple[int, int]]:
    """ルートが受けたリクエストの (offset, limit) 一覧。"""
    return [
        (int(call.request.url.params["offset"]), int(call.request.url.params["limit"]))
        for call in route.calls
    ]


@pytest.fixture
def client() -> HttpModrinthClient:
    return HttpModrinthClient(ModrinthConfig(base_url=f"{BASE_URL}/"))


def fail_after(
    handler: Callable[[httpx.Request], httpx.Response],
    ok_calls: int,
    failure: httpx.Response,
) -> Callable[[httpx.Request], httpx.Response]:
    """最初の ok_calls 回は handler に任せ、以降は failure を返すモック。"""
    calls = 0

    def wrapped(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return handler(request) if calls <= ok_calls else failure

    return wrapped


def make_project(**overrides: Any) -> dict[str, Any]:
    """プロジェクト詳細の JSON を生成する。"""
    project: dict[str, Any] = {
        "id": "AANobbMI",
        "slug": "sodium",
        "project_type": "mod",
        "team": "4reLOAKe",
        "title": "Sodium",
        "description": "A modern rendering engine",
        "body": "# Sodium",
        "published": "2021-01-03T00:53:34.185936Z",
        "updated": "2023-09-21T14:17:05.467839Z",
        "status": "approved",
        "moderator_message": None,
        "license": {"id": "LGPL-3.0-only", "name": "GNU LGPL v3", "url": None},
        "client_side": "required",
        "server_side": "unsupported",
        "downloads": 1000,
        "followers": 50,
        "categories": ["optimization"],
        "versions": ["yaoBL9D9", "P7dR8mSH"],
        "icon_url": None,
        "issues_url": "https://github.com/CaffeineMC/sodium-fabric/issues",
        "source_url": None,
        "wiki_url": None,
        "discord_url": None,
        "donation_urls": [],
        "gallery": [
            {
                "url": "https://cdn.modrinth.test/gallery/1.png",
                "featured": True,
                "title": None,
                "description": None,
                "created": "2022-05-01T00:00:00Z",
            }
        ],
    }
    project.update(overrides)
    return project


def make_version(**overrides: Any) -> dict[str, Any]:
    """プロジェクトバージョンの JSON を生成する。"""
    version: dict[str, Any] = {
        "id": "yaoBL9D9",
        "project_id": "AANobbMI",
        "author_id": "DzLrfrbK",
        "featured": False,
        "name": "Sodium 0.5.3",
        "version_number": "mc1.20.1-0.5.3",
        "changelog": None,
        "date_published": "2023-09-21T14:16:00Z",
        "downloads": 42,
        "version_type": "release",
        "files": [
            {
                "hashes": {"sha512": "ab" * 64, "sha1": "cd" * 20},
                "url": "https://cdn.modrinth.test/data/sodium.jar",
                "filename": "sodium.jar",
                "primary": True,
            }
        ],
        "dependencies": [
            {"version_id": None, "project_id": "P7dR8mSH", "dependency_type": "optional"}
        ],
        "game_versions": ["1.20.1"],
        "loaders": ["fabric"],
    }
    version.update(overrides)
    return version
