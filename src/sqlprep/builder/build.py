"""build: テンプレートからパラメータ化クエリを組み立てる."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from sqlprep.builder.coerce import flatten_params, splice
from sqlprep.builder.types import Param, Query, SqlTemplate

_ARRAY_TYPES = (list, tuple, set, frozenset)
"""IN 句のリストとして展開する型."""


@runtime_checkable
class Template(Protocol):
    """テキスト断片と埋め込み値を持つテンプレート.

    ``SqlTemplate`` と PEP 750 の ``string.templatelib.Template`` が該当する。
    """

    @property
    def strings(self) -> tuple[str, ...]:
        """テキスト断片."""
        ...

    @property
    def values(self) -> tuple[Any, ...]:
        """埋め込み値."""
        ...


def build(template: str | Template, *values: Any) -> Query:
    """パラメータ化クエリを組み立てる.

    2 つの呼び出し形式をサポートする。

    - 文字列 + 値: 文字列をそのまま SQL とし、``values`` を順にパラメータとする
    - テンプレート: 埋め込み値ごとにプレースホルダを生成する

    Args:
        template: SQL 文字列、またはテンプレート
        values: パラメータ（文字列形式のときのみ）

    Returns:
        組み立て結果

    Raises:
        TypeError: テンプレート形式で ``values`` を指定した場合、または template の型が不正な場合

    Examples:
        >>> build("SELECT * FROM users WHERE id = ?", 1)
        Query(sql='SELECT * FROM users WHERE id = ?', params=(1,))
        >>> build_format("SELECT * FROM users WHERE id IN {}", [1, 2, 3])
        Query(sql='SELECT * FROM users WHERE id IN (?, ?, ?)', params=(1, 2, 3))

    """
    if isinstance(template, str):
        return Query(template, flatten_params(values))
    if not isinstance(template, Template):
        msg = f"Cannot build a query from {type(template).__name__}"
        raise TypeError(msg)
    if values:
        msg = "Values must be embedded in the template, not passed separately"
        raise TypeError(msg)
    return _assemble(template.strings, template.values)


def build_template(segments: Sequence[str], *values: Any) -> Query:
    """テキスト断片と埋め込み値を交互に並べてクエリを組み立てる.

    Examples:
        >>> build_template(["SELECT * FROM users WHERE id = ", ""], 1)
        Query(sql='SELECT * FROM users WHERE id = ?', params=(1,))

    """
    return build(SqlTemplate.from_segments(segments, *values))


def build_format(text: str, *args: Any, **kwargs: Any) -> Query:
    """``str.format`` 形式の文字列からクエリを組み立てる."""
    return build(SqlTemplate.from_format(text, *args, **kwargs))


def _assemble(strings: Sequence[str], values: Sequence[Any]) -> Query:
    """テキスト断片を連結し、埋め込み値を展開する."""
    parts: list[str] = []
    params: list[Param] = []
    for i, segment in enumerate(strings):
        parts.append(segment)
        if i < len(values):
            sql, value_params = _expand(values[i])
            parts.append(sql)
            params.extend(value_params)
    return Query("".join(parts), tuple(params))


def _expand(value: Any) -> tuple[str, Sequence[Param]]:
    """埋め込み値 1 つを SQL 文字列とパラメータに展開する."""
    if not isinstance(value, _ARRAY_TYPES):
        return splice(value)

    # 空リストは何にもマッチしない IN (NULL) にする
    if not value:
        return "(NULL)", ()

    slots: list[str] = []
    params: list[Param] = []
    for item in value:
        sql, item_params = splice(item)
        slots.append(sql)
        params.extend(item_params)
    return "(" + ", ".join(slots) + ")", params
