"""modrinth_client ライブラリの例外型定義"""

from __future__ import annotations


class ModrinthError(Exception):
    """modrinth_client ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class ModrinthErrorCodes:
    """ModrinthError のエラーコード定数。"""

    TRANSPORT_ERROR: str = "TRANSPORT_ERROR"
    STATUS_NOT_OK: str = "STATUS_NOT_OK"
    DESERIALIZE_ERROR: str = "DESERIALIZE_ERROR"
    INPUT_ERROR: str = "INPUT_ERROR"


class TransportError(ModrinthError):
    """接続・ネットワーク層の失敗。リトライは行わない。"""

    def __init__(self, url: str, cause: Exception) -> None:
        super().__init__(
            code=ModrinthErrorCodes.TRANSPORT_ERROR,
            message=f"GET {url} failed: {cause}",
            cause=cause,
        )
        self.url = url


class StatusNotOkError(ModrinthError):
    """200 以外のレスポンス。本文のバイト列をそのまま保持する。"""

    def __init__(self, status: int, url: str, body: bytes) -> None:
        super().__init__(
            code=ModrinthErrorCodes.STATUS_NOT_OK,
            message=f"GET {url} returned HTTP {status}",
        )
        self.status = status
        self.url = url
        self.body = body


class DeserializeError(ModrinthError):
    """JSON の形が期待する型と一致しない。

    Attributes:
        url: 解決済みリクエスト URL
        path: 失敗したフィールドのパス（例: ``hits[3].status``、ルートは ``.``）
        body: レスポンス本文のバイト列
        errors: pydantic が報告したエラーの一覧
    """

    def __init__(
        self,
        url: str,
        path: str,
        body: bytes,
        reason: str,
        errors: list[dict] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ModrinthErrorCodes.DESERIALIZE_ERROR,
            message=f"failed to decode response from {url} at {path}: {reason}",
            cause=cause,
        )
        self.url = url
        self.path = path
        self.body = body
        self.errors = errors or []


class InputError(ModrinthError):
    """呼び出し側の引数が不正。リクエスト送信前に拒否する。"""

    def __init__(self, message: str) -> None:
        super().__init__(code=ModrinthErrorCodes.INPUT_ERROR, message=message)


class Base62DecodeError(ValueError):
    """base62 文字列のデコード失敗。"""

    INVALID_CHARACTER: str = "INVALID_CHARACTER"
    ARITHMETIC_OVERFLOW: str = "ARITHMETIC_OVERFLOW"
    EMPTY_INPUT: str = "EMPTY_INPUT"

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"
