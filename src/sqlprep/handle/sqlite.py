"""SqliteHandle: DB-API 接続を prepare/bind 形式で扱うハンドル."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from sqlprep.builder.types import Param

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    """書き込み系 SQL の実行結果."""

    changes: int
    """影響を受けた行数."""

    last_row_id: int | None
    """自動生成された ID（lastrowid）."""


class SqliteHandle:
    """``?`` 形式の DB-API 接続（sqlite3 など）を包むハンドル.

    Examples:
        >>> handle = SqliteHandle(sqlite3.connect(":memory:"))
        >>> prepare(handle, "SELECT * FROM users WHERE id = ?", 1).all()

        auto_commit モード:

        >>> handle = SqliteHandle(connection, auto_commit=True)
        >>> handle.prepare("DELETE FROM users WHERE id = ?").bind(1).run()  # 即座に commit

    """

    def __init__(self, connection: Any, *, auto_commit: bool = False) -> None:
        """初期化.

        Args:
            connection: DB 接続オブジェクト（PEP 249 DB-API 2.0 準拠、paramstyle は qmark）
            auto_commit: True の場合、run() 後に自動で commit する

        """
        self._connection = connection
        self._auto_commit = auto_commit

    def __enter__(self) -> SqliteHandle:
        """コンテキストマネージャ: connection に委譲."""
        self._connection.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        """コンテキストマネージャ: connection に委譲."""
        return self._connection.__exit__(exc_type, exc_val, exc_tb)

    def prepare(self, sql: str) -> SqliteStatement:
        """SQL からステートメントを作る."""
        return SqliteStatement(self, sql)

    def commit(self) -> None:
        """トランザクションをコミットする（connection.commit() のラッパー）."""
        self._connection.commit()

    def rollback(self) -> None:
        """トランザクションをロールバックする（connection.rollback() のラッパー）."""
        self._connection.rollback()

    def _execute(self, sql: str, params: tuple[Param, ...]) -> Any:
        """SQL を実行し、カーソルを返す."""
        logger.debug("Executing SQL: %s (%d params)", sql, len(params))
        cursor = self._connection.cursor()
        try:
            cursor.execute(sql, params)
        except Exception:
            cursor.close()
            raise
        return cursor


class SqliteStatement:
    """SqliteHandle のステートメント.

    ``bind`` はパラメータを差し替えた新しいステートメントを返す。
    """

    def __init__(self, handle: SqliteHandle, sql: str, params: tuple[Param, ...] = ()) -> None:
        self._handle = handle
        self.sql = sql
        self.params = params

    def __repr__(self) -> str:
        return f"SqliteStatement(sql={self.sql!r}, params={self.params!r})"

    def bind(self, *params: Param) -> SqliteStatement:
        """パラメータをバインドしたステートメントを返す."""
        return SqliteStatement(self._handle, self.sql, params)

    def all(self) -> list[dict[str, Any]]:
        """SELECT を実行し、結果を辞書のリストで返す."""
        cursor = self._handle._execute(self.sql, self.params)
        try:
            if cursor.description is None:
                return []
            columns = [desc[0] for desc in cursor.description]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def first(self, column: str | None = None) -> Any:
        """SELECT を実行し、最初の1行を返す.

        Args:
            column: 指定時はその列の値のみを返す

        Returns:
            行の辞書（column 指定時は列の値）、または結果がない場合は None

        Raises:
            KeyError: column が結果に存在しない場合

        """
        cursor = self._handle._execute(self.sql, self.params)
        try:
            if cursor.description is None:
                return None
            row = cursor.fetchone()
            if row is None:
                return None
            columns = [desc[0] for desc in cursor.description]
            record = dict(zip(columns, row))
        finally:
            cursor.close()
        if column is None:
            return record
        return record[column]

    def run(self) -> RunResult:
        """INSERT/UPDATE/DELETE を実行し、影響行数と自動生成 ID を返す."""
        cursor = self._handle._execute(self.sql, self.params)
        try:
            if self._handle._auto_commit:
                self._handle.commit()
            return RunResult(changes=cursor.rowcount, last_row_id=cursor.lastrowid)
        finally:
            cursor.close()
