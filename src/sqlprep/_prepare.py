"""prepare / wrap_handle 便利関数."""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING, Any

from sqlprep.builder.build import build
from sqlprep.exceptions import NoConnectionError

if TYPE_CHECKING:
    from sqlprep.builder.build import Template
    from sqlprep.handle.protocol import PreparedHandle

logger = logging.getLogger(__name__)


def prepare(handle: PreparedHandle, template: str | Template, *values: Any) -> Any:
    """クエリを組み立て、ハンドル上のプリペアドステートメントにバインドする.

    Args:
        handle: ``prepare(sql).bind(*params)`` を持つデータベースハンドル
        template: SQL 文字列、またはテンプレート
        values: パラメータ（文字列形式のときのみ）

    Returns:
        パラメータをバインド済みのステートメント

    Examples:
        >>> stmt = prepare(handle, "SELECT * FROM users WHERE id = ?", 123)
        >>> stmt = prepare(handle, SqlTemplate.from_format("SELECT * FROM users WHERE id = {}", 123))

    """
    query = build(template, *values)
    logger.debug("Prepared SQL: %s (%d params)", query.sql, len(query.params))
    return handle.prepare(query.sql).bind(*query.params)


pp = prepare


def wrap_handle(handle: PreparedHandle) -> Callable[..., Any]:
    """ハンドルを束縛した ``prepare`` を返す.

    Raises:
        NoConnectionError: handle が未指定の場合

    Examples:
        >>> q = wrap_handle(handle)
        >>> rows = q("SELECT * FROM users WHERE id = ?", 1).all()

    """
    if not handle:
        msg = "Database connection is not established."
        raise NoConnectionError(msg)
    return partial(prepare, handle)
