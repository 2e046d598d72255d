"""GET を発行してレスポンスを型付きの値にデコードする実行器"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Generic, TypeVar

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from .exceptions import DeserializeError, StatusNotOkError, TransportError

T = TypeVar("T")

logger = structlog.get_logger(__name__)


@dataclass
class ApiResponse(Generic[T]):
    """レスポンス本文のバイト列とデコード済みの値の組。

    ``content, value = response`` のように展開できる。
    """

    content: bytes
    value: T

    def __iter__(self) -> Iterator[Any]:
        yield self.content
        yield self.value


@lru_cache(maxsize=None)
def _adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def format_error_path(loc: Sequence[int | str]) -> str:
    """pydantic のエラー位置を ``hits[3].status`` 形式に変換する。"""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path or "."


def decode_response(url: str, status: int, body: bytes, type_: type[T]) -> ApiResponse[T]:
    """ステータスを検査して本文を ``type_`` にデコードする。

    Raises:
        StatusNotOkError: ステータスが 200 以外の場合
        DeserializeError: 本文が ``type_`` に適合しない場合
    """
    if status != httpx.codes.OK:
        raise StatusNotOkError(status=status, url=url, body=body)
    try:
        value = _adapter(type_).validate_json(body)
    except ValidationError as e:
        errors = e.errors(include_url=False)
        first = errors[0] if errors else {"loc": (), "msg": str(e)}
        path = format_error_path(first["loc"])
        logger.warning(
            "response did not match the expected shape",
            url=url,
            path=path,
            error_count=len(errors),
        )
        raise DeserializeError(
            url=url,
            path=path,
            body=body,
            reason=first["msg"],
            errors=errors,
            cause=e,
        ) from e
    return ApiResponse(content=body, value=value)


class DecodingExecutor:
    """共有 httpx クライアント上で GET を発行してデコードする。

    同期・非同期のクライアントはどちらも呼び出し側が所有し、
    この実行器は参照を保持するだけで閉じることはない。
    """

    def __init__(
        self,
        http: httpx.Client | None = None,
        async_http: httpx.AsyncClient | None = None,
    ) -> None:
        self._http = http
        self._async_http = async_http

    def attach_async(self, async_http: httpx.AsyncClient) -> None:
        """後から生成した非同期クライアントを割り当てる。"""
        self._async_http = async_http

    def get(
        self,
        url: str,
        type_: type[T],
        headers: dict[str, str] | None = None,
    ) -> ApiResponse[T]:
        """同期 GET。本文はすべて読み込んでからデコードする。"""
        if self._http is None:
            raise RuntimeError("DecodingExecutor has no synchronous HTTP client")
        request = self._http.build_request("GET", url, headers=headers)
        resolved = str(request.url)
        try:
            response = self._http.send(request)
        except httpx.HTTPError as e:
            logger.warning("request failed", url=resolved, error=str(e))
            raise TransportError(resolved, e) from e
        logger.debug(
            "response received",
            url=resolved,
            status=response.status_code,
            bytes=len(response.content),
        )
        return decode_response(resolved, response.status_code, response.content, type_)

    async def get_async(
        self,
        url: str,
        type_: type[T],
        headers: dict[str, str] | None = None,
    ) -> ApiResponse[T]:
        """非同期 GET。レスポンス待ちの間だけ中断する。"""
        if self._async_http is None:
            raise RuntimeError("DecodingExecutor has no asynchronous HTTP client")
        request = self._async_http.build_request("GET", url, headers=headers)
        resolved = str(request.url)
        try:
            response = await self._async_http.send(request)
        except httpx.HTTPError as e:
            logger.warning("request failed", url=resolved, error=str(e))
            raise TransportError(resolved, e) from e
        logger.debug(
            "response received",
            url=resolved,
            status=response.status_code,
            bytes=len(response.content),
        )
        return decode_response(resolved, response.status_code, response.content, type_)
