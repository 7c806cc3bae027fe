"""クエリビルダーパッケージ."""

from sqlprep.builder.build import Template, build, build_format, build_template
from sqlprep.builder.coerce import coerce
from sqlprep.builder.fragment import f, fragment, fragment_format
from sqlprep.builder.insert import insert, into
from sqlprep.builder.raw import r, raw
from sqlprep.builder.types import Fragment, Param, Query, Raw, SqlTemplate
from sqlprep.builder.validate import v, validate

__all__ = [
    "Fragment",
    "Param",
    "Query",
    "Raw",
    "SqlTemplate",
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
    "r",
    "raw",
    "v",
    "validate",
]
