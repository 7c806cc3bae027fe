"""raw: SQL 文字列をそのまま埋め込むマーカー."""

from __future__ import annotations

from collections.abc import Sequence

from sqlprep.builder.build import Template
from sqlprep.builder.types import Param, Raw


def raw(sql: str | Template, params: Sequence[Param] | None = None) -> Raw:
    """エスケープせずに埋め込む SQL を作る.

    テンプレートを渡した場合、埋め込み値は ``str()`` でそのまま連結され
    パラメータ化されない（``None`` は空文字列）。値を安全に埋め込みたい場合は
    ``fragment`` を使うこと。

    Args:
        sql: SQL 文字列、またはテンプレート
        params: SQL 中の ``?`` にバインドするパラメータ（文字列形式のときのみ）

    Returns:
        Raw マーカー

    Raises:
        TypeError: テンプレート形式で params を指定した場合、または sql の型が不正な場合

    Examples:
        >>> raw("created_at DESC")
        Raw(sql='created_at DESC', params=())
        >>> raw("age > ?", [30])
        Raw(sql='age > ?', params=(30,))

    """
    if isinstance(sql, str):
        return Raw(sql, tuple(params or ()))
    if not isinstance(sql, Template):
        msg = f"Cannot create raw SQL from {type(sql).__name__}"
        raise TypeError(msg)
    if params is not None:
        msg = "params cannot be combined with a template"
        raise TypeError(msg)

    parts: list[str] = []
    values = sql.values
    for i, segment in enumerate(sql.strings):
        parts.append(segment)
        if i < len(values) and values[i] is not None:
            parts.append(str(values[i]))
    return Raw("".join(parts))


r = raw
