"""クライアント設定（pydantic BaseModel）と YAML からの読み込み"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .endpoints import DEFAULT_API_BASE
from .exceptions import ModrinthError


class ConfigError(ModrinthError):
    """設定ファイルの読み込みエラー。対象ファイルのパスを保持する。"""

    def __init__(
        self, code: str, path: Path, reason: str, cause: Exception | None = None
    ) -> None:
        super().__init__(code=code, message=f"{path}: {reason}", cause=cause)
        self.path = path


class ConfigErrorCodes:
    """ConfigError のエラーコード定数。"""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"


class LogSection(BaseModel):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class ModrinthConfig(BaseModel):
    """Modrinth クライアント設定。

    token を指定すると全リクエストに ``Authorization: Bearer <token>`` を付与する。
    """

    base_url: str = DEFAULT_API_BASE
    token: str | None = None
    timeout_seconds: float = Field(default=10.0, gt=0)
    user_agent: str = "k1s0-modrinth-client/0.1.0"
    log: LogSection = Field(default_factory=LogSection)


def _read_yaml(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(ConfigErrorCodes.READ_FILE, path, "cannot read file", e) from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(ConfigErrorCodes.PARSE_YAML, path, "invalid YAML", e) from e


def load_config(path: Path) -> ModrinthConfig:
    """YAML ファイルを読み込んで ModrinthConfig を返す。空のファイルは既定値になる。

    Raises:
        ConfigError: 読み込み・YAML 解析・検証のいずれかに失敗した場合
    """
    data = _read_yaml(path) or {}
    try:
        return ModrinthConfig.model_validate(data)
    except ValidationError as e:
        reason = f"{e.error_count()} invalid setting(s): {e.errors()[0]['msg']}"
        raise ConfigError(ConfigErrorCodes.VALIDATION, path, reason, e) from e
