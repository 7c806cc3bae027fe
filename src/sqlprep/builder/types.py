"""クエリと埋め込みマーカーの型定義."""

from __future__ import annotations

import datetime
from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from string import Formatter
from typing import Any, TypeAlias

Param: TypeAlias = (
    str
    | int
    | float
    | Decimal
    | bool
    | None
    | datetime.date
    | datetime.time
    | bytes
    | bytearray
    | memoryview
)
"""プリペアドステートメントにバインドできる値."""


@dataclass(frozen=True)
class Query:
    """組み立て結果.

    ``sql`` 中の ``?`` の個数と ``params`` の要素数は常に一致する。
    別のテンプレートに埋め込むと括弧付きのサブクエリとして展開される。
    """

    sql: str
    params: tuple[Param, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))


@dataclass(frozen=True)
class Raw:
    """そのまま埋め込まれる SQL 文字列."""

    sql: str
    params: tuple[Param, ...] = ()
    """埋め込み時に後ろへ連結されるパラメータ."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))


@dataclass(frozen=True)
class Fragment:
    """パラメータ付きの SQL 断片（括弧で囲まずに埋め込まれる）."""

    sql: str
    params: tuple[Param, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))


@dataclass(frozen=True)
class SqlTemplate:
    """テキスト断片と埋め込み値を交互に並べたテンプレート.

    ``strings[0] values[0] strings[1] ... strings[n]`` の順に解釈する。
    PEP 750 の ``string.templatelib.Template`` と同じ ``strings`` /
    ``values`` 属性を持つため、どちらも同じように扱える。
    """

    strings: tuple[str, ...]
    values: tuple[Any, ...] = field(default=())

    def __post_init__(self) -> None:
        if len(self.strings) != len(self.values) + 1:
            msg = (
                f"Template needs exactly one more string than values: "
                f"{len(self.strings)} strings, {len(self.values)} values"
            )
            raise ValueError(msg)

    @classmethod
    def from_segments(cls, segments: Sequence[str], *values: Any) -> SqlTemplate:
        """テキスト断片と値のリストからテンプレートを作る.

        Args:
            segments: テキスト断片（値の個数 + 1 個）
            values: 断片の間に埋め込む値

        Raises:
            ValueError: 断片と値の個数が合わない場合

        """
        return cls(tuple(segments), tuple(values))

    @classmethod
    def from_format(cls, text: str, *args: Any, **kwargs: Any) -> SqlTemplate:
        """``str.format`` 形式の文字列からテンプレートを作る.

        ``{}`` / ``{0}`` / ``{name}`` の位置が埋め込み値になる。
        ``{{`` と ``}}`` はそれぞれ波括弧そのものとして扱う。

        Args:
            text: ``str.format`` 形式の SQL
            args: 位置指定の値
            kwargs: 名前指定の値

        Returns:
            テンプレート

        Raises:
            ValueError: 書式指定・変換指定がある場合、または自動番号と手動番号を混在させた場合

        Examples:
            >>> SqlTemplate.from_format("SELECT * FROM users WHERE id IN {ids}", ids=[1, 2])
            SqlTemplate(strings=('SELECT * FROM users WHERE id IN ', ''), values=([1, 2],))

        """
        formatter = Formatter()
        strings: list[str] = []
        values: list[Any] = []
        pending = ""
        auto_index = 0
        numbering: str | None = None

        for literal, field_name, format_spec, conversion in formatter.parse(text):
            pending += literal
            if field_name is None:
                continue
            if format_spec or conversion:
                msg = f"Format spec and conversion are not supported: {{{field_name}}}"
                raise ValueError(msg)

            if field_name == "":
                if numbering == "manual":
                    msg = "Cannot switch from manual field numbering to automatic"
                    raise ValueError(msg)
                numbering = "auto"
                field_name = str(auto_index)
                auto_index += 1
            elif field_name[0].isdigit():
                if numbering == "auto":
                    msg = "Cannot switch from automatic field numbering to manual"
                    raise ValueError(msg)
                numbering = "manual"

            value, _ = formatter.get_field(field_name, args, kwargs)
            strings.append(pending)
            values.append(value)
            pending = ""

        strings.append(pending)
        return cls(tuple(strings), tuple(values))
