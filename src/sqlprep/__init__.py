"""sqlprep: SQLite 向けパラメータ化クエリビルダー."""

from sqlprep._prepare import pp, prepare, wrap_handle
from sqlprep.builder import (
    Fragment,
    Param,
    Query,
    Raw,
    SqlTemplate,
    Template,
    build,
    build_format,
    build_template,
    coerce,
    f,
    fragment,
    fragment_format,
    insert,
    into,
    r,
    raw,
    v,
    validate,
)
from sqlprep.exceptions import (
    DisallowedQueryError,
    EmptyInputError,
    InvalidQueryError,
    InvalidValidatorError,
    NoConnectionError,
    QueryValidationError,
    SqlprepError,
)
from sqlprep.handle import PreparedHandle, PreparedStatement, RunResult, SqliteHandle, SqliteStatement

__all__ = [
    "DisallowedQueryError",
    "EmptyInputError",
    "Fragment",
    "InvalidQueryError",
    "InvalidValidatorError",
    "NoConnectionError",
    "Param",
    "PreparedHandle",
    "PreparedStatement",
    "Query",
    "QueryValidationError",
    "Raw",
    "RunResult",
    "SqlTemplate",
    "SqliteHandle",
    "SqliteStatement",
    "SqlprepError",
    "Template",
    "build",
    "build_format",
    "build_template",
    "coerce",
    "f",
    "fragment",
    "fragment_format",
    "insert",
    "into",
    "pp",
    "prepare",
    "r",
    "raw",
    "v",
    "validate",
    "wrap_handle",
]
