"""公開 API のテスト."""

from __future__ import annotations


class TestPublicImports:
    """sqlprep パッケージからの公開インポート."""

    def test_import_builders(self) -> None:
        """ビルダー関数をインポートできる."""
        from sqlprep import build, build_format, build_template, fragment, insert, into, raw, validate

        for func in (build, build_format, build_template, fragment, insert, into, raw, validate):
            assert callable(func)

    def test_import_aliases(self) -> None:
        """短縮名は本体と同じ関数."""
        from sqlprep import f, fragment, pp, prepare, r, raw, v, validate

        assert r is raw
        assert f is fragment
        assert v is validate
        assert pp is prepare

    def test_import_types(self) -> None:
        """型をインポートできる."""
        from sqlprep import Fragment, Query, Raw, SqlTemplate

        assert Query("SELECT 1").params == ()
        assert Raw("NOW()").params == ()
        assert Fragment("id, name").params == ()
        assert SqlTemplate(("SELECT 1",)).values == ()

    def test_import_exceptions(self) -> None:
        """例外クラスをインポートできる."""
        from sqlprep import (
            DisallowedQueryError,
            EmptyInputError,
            InvalidQueryError,
            InvalidValidatorError,
            NoConnectionError,
            SqlprepError,
        )

        for exc in (
            DisallowedQueryError,
            EmptyInputError,
            InvalidQueryError,
            InvalidValidatorError,
            NoConnectionError,
        ):
            assert issubclass(exc, SqlprepError)

    def test_all_exports(self) -> None:
        """__all__ に必要な名前が含まれる."""
        import sqlprep

        expected = {
            "build",
            "raw",
            "fragment",
            "insert",
            "into",
            "validate",
            "prepare",
            "wrap_handle",
            "coerce",
            "Query",
            "Raw",
            "Fragment",
            "SqliteHandle",
            "PreparedHandle",
            "EmptyInputError",
            "DisallowedQueryError",
            "InvalidQueryError",
            "InvalidValidatorError",
            "NoConnectionError",
        }
        assert expected <= set(sqlprep.__all__)
        for name in sqlprep.__all__:
            assert hasattr(sqlprep, name)


class TestEndToEndImport:
    """エンドツーエンドのインポートと使用."""

    def test_full_workflow(self) -> None:
        """組み立てた断片を組み合わせて 1 つのクエリにできる."""
        from sqlprep import build_format, fragment_format, raw

        columns = fragment_format("id, name")
        condition = fragment_format("age > {}", 25)
        result = build_format(
            "SELECT {} FROM users WHERE {} AND id IN {} ORDER BY {}",
            columns,
            condition,
            [1, 2],
            raw("created_at DESC"),
        )
        assert result.sql == (
            "SELECT id, name FROM users WHERE age > ? AND id IN (?, ?) ORDER BY created_at DESC"
        )
        assert result.params == (25, 1, 2)
