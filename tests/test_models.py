"""レスポンスモデルのユニットテスト"""

import json

import pytest
from conftest import SEARCH_URL, make_hit, make_project, make_version
from k1s0_modrinth_client.base62 import Base62Id
from k1s0_modrinth_client.exceptions import DeserializeError
from k1s0_modrinth_client.executor import decode_response
from k1s0_modrinth_client.models import (
    DependencyType,
    LoaderSupport,
    Page,
    Project,
    ProjectSearchResult,
    ProjectStatus,
    ProjectType,
    ProjectVersion,
    SideSupport,
)
from pydantic import ValidationError


def test_unknown_enum_values_fall_back() -> None:
    """未知の列挙値は UNKNOWN として受け入れられること。"""
    hit = ProjectSearchResult.model_validate(
        make_hit(0, project_type="plugin", client_side="sometimes")
    )
    assert hit.project_type is ProjectType.UNKNOWN
    assert hit.client_side is SideSupport.UNKNOWN
    assert hit.server_side is SideSupport.OPTIONAL


def test_unknown_status_and_loader() -> None:
    """ステータスやローダーも未知の値で失敗しないこと。"""
    project = Project.model_validate(make_project(status="withheld"))
    assert project.status is ProjectStatus.UNKNOWN
    version = ProjectVersion.model_validate(make_version(loaders=["fabric", "neoforge"]))
    assert version.loaders == [LoaderSupport.FABRIC, LoaderSupport.UNKNOWN]


def test_search_hit_accepts_negative_counters() -> None:
    """検索結果の downloads / follows は -1 を受け入れること。"""
    hit = ProjectSearchResult.model_validate(make_hit(0, downloads=-1, follows=-1))
    assert hit.downloads == -1
    assert hit.follows == -1


def test_project_rejects_negative_downloads() -> None:
    """プロジェクト詳細の downloads は負数を受け付けないこと。"""
    with pytest.raises(ValidationError) as exc_info:
        Project.model_validate(make_project(downloads=-1))
    assert exc_info.value.errors()[0]["loc"] == ("downloads",)


def test_extra_fields_are_ignored() -> None:
    """未知のフィールドは無視されること。"""
    hit = ProjectSearchResult.model_validate(make_hit(0, featured_gallery=None, color=123))
    assert not hasattr(hit, "color")


def test_optional_fields_default() -> None:
    """省略可能なフィールドが欠けても読み込めること。"""
    data = make_hit(0)
    for key in ("slug", "latest_version", "icon_url", "gallery"):
        del data[key]
    hit = ProjectSearchResult.model_validate(data)
    assert hit.slug is None
    assert hit.icon_url == ""
    assert hit.gallery == []


def test_ids_serialize_as_base62_in_json() -> None:
    """ID フィールドは JSON 出力で base62 文字列に戻ること。"""
    version = ProjectVersion.model_validate_json(
        ProjectVersion.model_validate(make_version()).model_dump_json()
    )
    dumped = version.model_dump(mode="json")
    assert dumped["id"] == "yaoBL9D9"
    assert dumped["project_id"] == "AANobbMI"
    assert dumped["dependencies"][0]["project_id"] == "P7dR8mSH"
    assert dumped["dependencies"][0]["version_id"] is None


def test_version_dependency_parsing() -> None:
    """依存関係の ID と種別が読み込まれること。"""
    version = ProjectVersion.model_validate(make_version())
    dependency = version.dependencies[0]
    assert dependency.project_id == Base62Id.parse("P7dR8mSH")
    assert dependency.version_id is None
    assert dependency.dependency_type is DependencyType.OPTIONAL


def test_page_rejects_negative_total() -> None:
    """Page の total_hits は非負であること。"""
    with pytest.raises(ValidationError):
        Page[ProjectSearchResult].model_validate(
            {"hits": [], "offset": 0, "limit": 10, "total_hits": -1}
        )


def test_project_gallery_and_license() -> None:
    """ネストしたモデルが読み込まれること。"""
    project = Project.model_validate(make_project())
    assert project.gallery[0].featured is True
    assert project.license.name == "GNU LGPL v3"
    assert project.moderator_message is None
    assert project.donation_urls == []


@pytest.mark.parametrize("value", [None, 5, ["mod"]])
def test_non_string_enum_values_are_rejected(value: object) -> None:
    """文字列以外の列挙値は UNKNOWN にせず、そのフィールドの検証エラーにすること。"""
    with pytest.raises(ValidationError) as exc_info:
        ProjectSearchResult.model_validate(make_hit(0, client_side=value))
    assert exc_info.value.errors()[0]["loc"] == ("client_side",)


def test_null_enum_in_response_reports_path() -> None:
    """JSON の null はデコード時にパス付きで報告されること。"""
    body = json.dumps(
        {"hits": [make_hit(0, project_type=None)], "offset": 0, "limit": 1, "total_hits": 1}
    )
    with pytest.raises(DeserializeError) as exc_info:
        decode_response(SEARCH_URL, 200, body.encode(), Page[ProjectSearchResult])
    assert exc_info.value.path == "hits[0].project_type"
