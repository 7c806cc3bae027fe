"""PreparedHandle プロトコル定義."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PreparedStatement(Protocol):
    """プリペアドステートメントのインターフェース."""

    def bind(self, *params: Any) -> Any:
        """パラメータをバインドした実行可能ステートメントを返す."""
        ...


@runtime_checkable
class PreparedHandle(Protocol):
    """データベースハンドルのインターフェース."""

    def prepare(self, sql: str) -> PreparedStatement:
        """SQL からプリペアドステートメントを作る."""
        ...
