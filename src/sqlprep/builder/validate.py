"""validate: Raw SQL の許可リスト・検証関数によるチェック."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Collection
from typing import Any, TypeAlias

from sqlprep.builder.raw import raw
from sqlprep.builder.types import Raw
from sqlprep.exceptions import DisallowedQueryError, InvalidQueryError, InvalidValidatorError

logger = logging.getLogger(__name__)

StringValidator: TypeAlias = Callable[[str], bool]
RawValidator: TypeAlias = Callable[[Raw, bool], bool]
Validator: TypeAlias = Collection[str] | StringValidator | RawValidator

_ALLOW_LIST_TYPES = (list, tuple, set, frozenset)


def validate(query: str | Raw, validator: Validator) -> Raw:
    """Raw SQL を検証し、Raw マーカーとして返す.

    validator の形式:

    - 文字列のリスト: 許可リストに含まれるか
    - 引数 1 つの関数: SQL 文字列を受け取り真偽値を返す
    - 引数 2 つの関数: Raw マーカーと ``True`` を受け取り真偽値を返す

    Args:
        query: SQL 文字列、または Raw マーカー
        validator: 許可リスト、または検証関数

    Returns:
        検証済みの Raw マーカー

    Raises:
        DisallowedQueryError: 許可リストに含まれない場合
        InvalidQueryError: 検証関数が偽を返した場合
        InvalidValidatorError: validator の形式が不正な場合
        TypeError: query が文字列でも Raw でもない場合

    Examples:
        >>> validate("SELECT * FROM users", ["SELECT * FROM users"])
        Raw(sql='SELECT * FROM users', params=())

    """
    if isinstance(query, str):
        marker = raw(query)
    elif isinstance(query, Raw):
        marker = query
    else:
        msg = f"Cannot validate {type(query).__name__}; expected str or Raw"
        raise TypeError(msg)

    if isinstance(validator, _ALLOW_LIST_TYPES):
        if marker.sql not in validator:
            logger.warning("Query rejected by allow list: %s", marker.sql)
            msg = f'Query "{marker.sql}" is not in the allowed list'
            raise DisallowedQueryError(msg, marker.sql)
        return marker

    match _arity(validator):
        case 1:
            text = query if isinstance(query, str) else marker.sql
            valid = validator(text)  # type: ignore[operator]
        case 2:
            valid = validator(marker, True)  # type: ignore[operator]
        case _:
            msg = "Invalid validator type"
            raise InvalidValidatorError(msg)

    if not valid:
        logger.warning("Query rejected by validator: %s", marker.sql)
        msg = f'Query "{marker.sql}" is not valid'
        raise InvalidQueryError(msg, marker.sql)
    return marker


def _arity(validator: Any) -> int | None:
    """検証関数の必須位置引数の数を返す（関数でなければ None）."""
    if not callable(validator):
        return None
    try:
        signature = inspect.signature(validator)
    except (TypeError, ValueError):
        return None
    positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    return sum(
        1
        for p in signature.parameters.values()
        if p.kind in positional and p.default is inspect.Parameter.empty
    )


v = validate
