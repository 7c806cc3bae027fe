"""sqlprep例外クラス."""

from __future__ import annotations


class SqlprepError(Exception):
    """sqlprepの基底例外."""


class EmptyInputError(SqlprepError):
    """INSERT する行が1件もない."""


class QueryValidationError(SqlprepError):
    """Raw SQL の検証に失敗した.

    Attributes:
        query: 拒否された SQL 文字列

    """

    def __init__(self, message: str, query: str) -> None:
        super().__init__(message)
        self.query = query


class DisallowedQueryError(QueryValidationError):
    """許可リストに含まれない SQL."""


class InvalidQueryError(QueryValidationError):
    """検証関数が偽を返した SQL."""


class InvalidValidatorError(SqlprepError):
    """検証ルールの形式が不正."""


class NoConnectionError(SqlprepError):
    """データベースハンドルが未指定."""
