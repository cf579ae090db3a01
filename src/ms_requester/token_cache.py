"""サービスごとの Bearer トークンキャッシュ"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class _ReadWriteLock:
    """読み取りは並行、書き込みは排他のロック。待機中の writer を優先する。"""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class TokenCache:
    """サービス識別子 → トークンのプロセス内キャッシュ。

    全サービスで 1 つのストアを共有し、スレッドおよび asyncio タスクから
    安全に呼び出せる。空文字のトークンは保存しない。
    """

    def __init__(self) -> None:
        self._tokens: dict[str, str] = {}
        self._lock = _ReadWriteLock()

    def get(self, service: str) -> str | None:
        """キャッシュ済みトークンを返す。存在しなければ None。"""
        with self._lock.read():
            return self._tokens.get(service)

    def set(self, service: str, token: str) -> None:
        """トークンを保存する（既存値は上書き）。

        Raises:
            ValueError: token が空文字の場合
        """
        if not token:
            raise ValueError(f"empty token for service: {service}")
        with self._lock.write():
            self._tokens[service] = token

    def replace_if_present(self, service: str, token: str) -> bool:
        """エントリが存在し値が異なる場合のみ置き換える。置き換えたら True。

        存在確認と書き込みを 1 つの書き込みロック内で行うため、並行する
        delete の後にエントリが再作成されることはない。

        Raises:
            ValueError: token が空文字の場合
        """
        if not token:
            raise ValueError(f"empty token for service: {service}")
        with self._lock.write():
            current = self._tokens.get(service)
            if current is None or current == token:
                return False
            self._tokens[service] = token
            return True

    def delete(self, service: str) -> None:
        """トークンを削除する。存在しなければ何もしない。"""
        with self._lock.write():
            self._tokens.pop(service, None)
