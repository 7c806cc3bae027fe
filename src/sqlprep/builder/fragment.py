"""fragment: パラメータ付き SQL 断片."""

from __future__ import annotations

from typing import Any

from sqlprep.builder.build import Template, build
from sqlprep.builder.types import Fragment, SqlTemplate


def fragment(template: str | Template, *values: Any) -> Fragment:
    """括弧で囲まずに埋め込む SQL 断片を作る.

    ``raw`` と異なり、埋め込み値はプレースホルダとしてパラメータ化される。

    Examples:
        >>> fragment_format("status = {} AND type = {}", "active", "user")
        Fragment(sql='status = ? AND type = ?', params=('active', 'user'))

    """
    query = build(template, *values)
    return Fragment(query.sql, query.params)


def fragment_format(text: str, *args: Any, **kwargs: Any) -> Fragment:
    """``str.format`` 形式の文字列から SQL 断片を作る."""
    return fragment(SqlTemplate.from_format(text, *args, **kwargs))


f = fragment
