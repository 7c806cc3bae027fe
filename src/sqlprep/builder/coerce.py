"""埋め込み値の分類と変換."""

from __future__ import annotations

import datetime
import json
import math
from collections.abc import Iterable, Mapping
from dataclasses import fields, is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from sqlprep.builder.types import Fragment, Param, Query, Raw

_QUERY_KEYS = ("sql", "text", "query")
"""サブクエリとして扱う値が持つ SQL 文字列のキー（属性）名."""


def coerce(value: Any) -> Param | Raw | Fragment | Query:
    """値をバインドパラメータまたはマーカーに変換する.

    - ``None`` / 日付・時刻 / バイト列 / 文字列 / 数値（``Decimal`` を含む）/ 真偽値はそのまま
    - ``Raw`` / ``Fragment`` / ``Query`` はそのまま
    - ``sql`` (``text``, ``query``) と ``params`` を持つ値は ``Query`` に正規化
    - それ以外は JSON 文字列

    Args:
        value: 変換対象の値

    Returns:
        バインドパラメータ、またはマーカー

    """
    match value:
        case None:
            return None
        case Raw() | Fragment() | Query():
            return value
        case datetime.date() | datetime.time() | bytes() | bytearray() | memoryview():
            return value
        case str() | int() | float() | Decimal():
            return value

    subquery = as_query(value)
    if subquery is not None:
        return subquery
    return to_json(value)


def as_query(value: Any) -> Query | None:
    """サブクエリ形状の値を ``Query`` に変換する.

    Returns:
        ``Query``。サブクエリ形状でなければ None。

    """
    if isinstance(value, Query):
        return value

    if isinstance(value, Mapping):
        if not _is_param_list(value.get("params")):
            return None
        for key in _QUERY_KEYS:
            if isinstance(value.get(key), str):
                return Query(value[key], flatten_params(value["params"]))
        return None

    params = getattr(value, "params", None)
    if not _is_param_list(params):
        return None
    for key in _QUERY_KEYS:
        sql = getattr(value, key, None)
        if isinstance(sql, str):
            return Query(sql, flatten_params(params))
    return None


def _is_param_list(obj: Any) -> bool:
    return isinstance(obj, Iterable) and not isinstance(obj, (str, bytes, bytearray, Mapping))


def splice(value: Any) -> tuple[str, tuple[Param, ...]]:
    """1つの値を SQL 文字列とパラメータに展開する.

    ``Raw`` / ``Fragment`` はそのまま、サブクエリは括弧付きで展開し、
    それ以外はプレースホルダ ``?`` 1つになる。

    Returns:
        (SQL 文字列, パラメータ) のタプル

    """
    match coerce(value):
        case Raw(sql=sql, params=params) | Fragment(sql=sql, params=params):
            return sql, params
        case Query(sql=sql, params=params):
            return f"({sql})", params
        case param:
            return "?", (param,)


def flatten_params(values: Iterable[Any]) -> tuple[Param, ...]:
    """値の並びをバインドパラメータの並びに平坦化する.

    マーカーは自身の 1 要素ではなく、持っているパラメータ列に置き換わる。
    """
    return tuple(param for value in values for param in splice(value)[1])


def to_json(value: Any) -> str:
    """値をコンパクトな JSON 文字列に変換する.

    JSON で表現できない値は事前に変換する。

    - dataclass / pydantic モデル → オブジェクト
    - Mapping → オブジェクト（文字列・数値・真偽値・None 以外のキーは ``str()``）
    - その他の反復可能オブジェクト（set, deque, ジェネレータなど）→ 配列
    - NaN / Infinity → null
    - 日付・時刻 → ISO 8601 文字列、バイト列 → 16 進文字列、Decimal → 文字列、Enum → 値
    - それ以外 → ``str()``

    Raises:
        ValueError: 循環参照がある場合

    Examples:
        >>> to_json({"id": 1, "name": "t"})
        '{"id":1,"name":"t"}'
        >>> to_json({(1, 2): float("nan")})
        '{"(1, 2)":null}'

    """
    return json.dumps(
        _to_jsonable(value, set()),
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )


def _to_jsonable(obj: Any, active: set[int]) -> Any:
    """値を JSON のネイティブ型（dict / list / str / 数値 / bool / None）に変換する."""
    match obj:
        case None | bool() | int() | str():
            return obj
        case float():
            return obj if math.isfinite(obj) else None
        case Decimal():
            return str(obj)
        case datetime.date() | datetime.time():
            return obj.isoformat()
        case bytes() | bytearray() | memoryview():
            return bytes(obj).hex()
        case Enum():
            return _to_jsonable(obj.value, active)

    if id(obj) in active:
        msg = "Circular reference detected"
        raise ValueError(msg)
    active.add(id(obj))
    try:
        return _container_to_jsonable(obj, active)
    finally:
        active.discard(id(obj))


def _container_to_jsonable(obj: Any, active: set[int]) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        obj = {f.name: getattr(obj, f.name) for f in fields(obj)}
    elif hasattr(obj, "model_dump") and not isinstance(obj, type):
        # pydantic BaseModel
        obj = obj.model_dump(mode="json")

    if isinstance(obj, Mapping):
        return {_json_key(key): _to_jsonable(value, active) for key, value in obj.items()}
    if isinstance(obj, Iterable):
        return [_to_jsonable(item, active) for item in obj]
    return str(obj)


def _json_key(key: Any) -> str | int | bool | None:
    """Mapping のキーを JSON のキーとして使える値にする."""
    if key is None or isinstance(key, (str, int)):
        return key
    return str(key)
