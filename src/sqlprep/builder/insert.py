"""insert: INSERT 文の組み立て."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import fields, is_dataclass
from typing import Any

from sqlprep.builder.coerce import splice
from sqlprep.builder.types import Fragment, Param
from sqlprep.exceptions import EmptyInputError


def into(table: str) -> str:
    """テーブル名をそのまま返す（``insert(into("users"), ...)`` と書くため）."""
    return table


def insert(table: str, rows: Any) -> Fragment:
    """INSERT 文の SQL 断片を作る.

    複数行の場合、全行のキーの和集合（初出順）をカラムとし、
    行に存在しないカラムには NULL を入れる。
    テーブル名・カラム名はエスケープしない。

    Args:
        table: テーブル名
        rows: 1 行、または行のリスト。行は Mapping / dataclass / pydantic モデル

    Returns:
        INSERT 文の Fragment

    Raises:
        EmptyInputError: 行が 0 件の場合
        TypeError: 行として扱えない値、または文字列でないカラム名が含まれる場合

    Examples:
        >>> insert(into("users"), {"name": "John", "age": 30})
        Fragment(sql='INSERT INTO users (name, age) VALUES (?, ?)', params=('John', 30))

    """
    row_list = _to_rows(rows)
    if not row_list:
        msg = "Values array cannot be empty"
        raise EmptyInputError(msg)

    columns = list(dict.fromkeys(key for row in row_list for key in row))
    for column in columns:
        if not isinstance(column, str):
            msg = f"Column names must be str, not {type(column).__name__}: {column!r}"
            raise TypeError(msg)

    params: list[Param] = []
    tuples: list[str] = []
    for row in row_list:
        cells: list[str] = []
        for column in columns:
            sql, cell_params = splice(row[column] if column in row else None)
            cells.append(sql)
            params.extend(cell_params)
        tuples.append("(" + ", ".join(cells) + ")")

    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES {', '.join(tuples)}"
    return Fragment(sql, tuple(params))


def _to_rows(rows: Any) -> list[Mapping[str, Any]]:
    """1 行または行のリストを Mapping のリストにする."""
    if _is_row(rows):
        return [_to_mapping(rows)]
    if not isinstance(rows, Iterable) or isinstance(rows, (str, bytes)):
        msg = f"Cannot insert {type(rows).__name__}; expected a row or a list of rows"
        raise TypeError(msg)
    return [_to_mapping(row) for row in rows]


def _is_row(obj: Any) -> bool:
    return (
        isinstance(obj, Mapping)
        or (is_dataclass(obj) and not isinstance(obj, type))
        or hasattr(obj, "model_dump")
    )


def _to_mapping(row: Any) -> Mapping[str, Any]:
    """1 行をカラム名→値の Mapping に変換する."""
    if isinstance(row, Mapping):
        return row
    if is_dataclass(row) and not isinstance(row, type):
        # フィールド値はそのまま（Raw/Fragment も保持）
        return {f.name: getattr(row, f.name) for f in fields(row)}
    if hasattr(row, "model_dump"):
        return row.model_dump()
    msg = f"Cannot use {type(row).__name__} as an insert row"
    raise TypeError(msg)
