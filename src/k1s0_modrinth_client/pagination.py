"""検索結果の自動ページング

``PaginatorState`` はネットワークを持たない状態機械で、同期イテレータ
``SearchPaginator`` と非同期イテレータ ``SearchStream`` はどちらもその上の
薄いアダプタに過ぎない。

状態遷移:
    未初期化 → 最初の取得で limit=1 のプローブを送り total_hits を得る
    消費中   → バッファが空でない間はネットワークを使わない
    補充     → バッファが空で offset < total なら現在の offset/limit で取得
    枯渇     → バッファが空で offset >= total なら終了
    エラー   → 失敗を一度だけ送出し、以降の取得はすべて終了扱い
"""

from __future__ import annotations

from collections import deque
from typing import Any, Generic, TypeVar

import structlog

from .endpoints import search_path
from .executor import DecodingExecutor
from .models import Page, ProjectSearchResult
from .query import SearchParams

T = TypeVar("T")

logger = structlog.get_logger(__name__)


class PaginatorState(Generic[T]):
    """ページングの状態。offset・バッファ・total を一つのインスタンスが専有する。"""

    def __init__(self, params: SearchParams) -> None:
        self._params = params.model_copy(deep=True)
        self._initial_offset = self._params.offset or 0
        self._params.offset = self._initial_offset
        self._buffer: deque[T] = deque()
        self._total: int | None = None
        self._finished = False

    @property
    def offset(self) -> int:
        """次にサーバーから取得する位置。"""
        return self._params.offset or 0

    @property
    def total(self) -> int | None:
        return self._total

    @property
    def finished(self) -> bool:
        return self._finished

    def has_buffered(self) -> bool:
        return bool(self._buffer)

    def pop(self) -> T:
        return self._buffer.popleft()

    def size_hint(self) -> tuple[int, int | None]:
        return 0, self._total

    def pending_request(self) -> SearchParams | None:
        """次に送るべきリクエストのパラメータ。取得不要なら None を返す。"""
        if self._buffer or self._finished:
            return None
        if self._total is None:
            # 最初のリクエストの limit が大きいと API が誤った total_hits を返すため、
            # limit=1 のプローブで total を得る。
            return self._params.model_copy(update={"limit": 1})
        if self.offset >= self._total:
            logger.debug("search exhausted", offset=self.offset, total=self._total)
            self._finished = True
            return None
        return self._params.model_copy()

    def receive(self, page: Page[T]) -> None:
        """取得したページをバッファに積み、受け取った件数だけ offset を進める。"""
        if self._total is None:
            self._total = page.total_hits
            logger.debug("search total observed", total=self._total)
        elif page.total_hits != self._total:
            logger.debug(
                "server reported a different total; keeping the first one",
                total=self._total,
                reported=page.total_hits,
            )
        self._params.offset = self.offset + len(page.hits)
        self._buffer.extend(page.hits)
        if not page.hits and self.offset < self._total:
            logger.warning(
                "empty page before total was reached; ending search",
                offset=self.offset,
                total=self._total,
            )
            self._finished = True

    def fail(self) -> None:
        self._finished = True
        self._buffer.clear()


class _PaginatorBase(Generic[T]):
    def __init__(
        self,
        executor: DecodingExecutor,
        params: SearchParams,
        item_type: Any = ProjectSearchResult,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._executor = executor
        self._state: PaginatorState[T] = PaginatorState(params)
        self._page_type = Page[item_type]
        self._headers = headers

    @property
    def offset(self) -> int:
        return self._state.offset

    @property
    def total(self) -> int | None:
        """サーバーが報告した総件数。最初のページを受け取るまでは None。"""
        return self._state.total

    def size_hint(self) -> tuple[int, int | None]:
        """``(下限, 上限)``。下限は常に 0、上限は total が分かるまで None。"""
        return self._state.size_hint()

    def _log_fetch(self, request: SearchParams) -> None:
        logger.debug(
            "fetching search page",
            offset=request.offset,
            limit=request.limit,
            probe=self._state.total is None,
        )


class SearchPaginator(_PaginatorBase[T]):
    """検索結果を 1 件ずつ返す同期イテレータ。

    ページ取得が必要な ``next()`` の呼び出しだけが呼び出し元スレッドを
    ブロックする。インスタンスは単一の所有者から順に使うこと
    （複数スレッドからの同時呼び出しは禁止）。
    """

    def __iter__(self) -> SearchPaginator[T]:
        return self

    def __next__(self) -> T:
        while not self._state.has_buffered():
            request = self._state.pending_request()
            if request is None:
                raise StopIteration
            self._log_fetch(request)
            try:
                response = self._executor.get(search_path(request), self._page_type, self._headers)
            except Exception:
                self._state.fail()
                raise
            self._state.receive(response.value)
        return self._state.pop()


class SearchStream(_PaginatorBase[T]):
    """検索結果を 1 件ずつ返す非同期イテレータ。

    バッファに結果がある間は中断せず、ページ取得中だけ中断する。先読みは
    しないため、同時に実行中のリクエストは常に高々 1 つ。インスタンスは
    単一のタスクから順に使うこと。
    """

    def __aiter__(self) -> SearchStream[T]:
        return self

    async def __anext__(self) -> T:
        while not self._state.has_buffered():
            request = self._state.pending_request()
            if request is None:
                raise StopAsyncIteration
            self._log_fetch(request)
            try:
                response = await self._executor.get_async(
                    search_path(request), self._page_type, self._headers
                )
            except Exception:
                self._state.fail()
                raise
            self._state.receive(response.value)
        return self._state.pop()
