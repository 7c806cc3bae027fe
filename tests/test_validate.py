"""Validate のテスト."""

from __future__ import annotations

import logging

import pytest

from sqlprep import (
    DisallowedQueryError,
    InvalidQueryError,
    InvalidValidatorError,
    QueryValidationError,
    Raw,
    raw,
    v,
    validate,
)

ALLOWED = ["SELECT * FROM users", "SELECT id FROM users"]


def starts_with_select(text: str) -> bool:
    return text.startswith("SELECT")


class TestAllowList:
    """許可リストによる検証."""

    def test_string_input(self) -> None:
        assert validate("SELECT * FROM users", ALLOWED) == raw("SELECT * FROM users")

    def test_raw_input(self) -> None:
        """Raw を渡した場合は同じ Raw が返る."""
        marker = raw("SELECT * FROM users")
        assert validate(marker, ALLOWED) is marker

    def test_disallowed_string(self) -> None:
        with pytest.raises(DisallowedQueryError, match='Query "DELETE FROM users" is not in the allowed list'):
            validate("DELETE FROM users", ALLOWED)

    def test_disallowed_raw(self) -> None:
        with pytest.raises(DisallowedQueryError, match="is not in the allowed list"):
            validate(raw("DELETE FROM users"), ALLOWED)

    @pytest.mark.parametrize("allowed", [tuple(ALLOWED), set(ALLOWED), frozenset(ALLOWED)])
    def test_other_collections(self, allowed: object) -> None:
        """タプル・集合も許可リストとして扱う."""
        assert validate("SELECT id FROM users", allowed) == raw("SELECT id FROM users")  # type: ignore[arg-type]

    def test_exact_match_only(self) -> None:
        """前後の空白も含めて完全一致で比較する."""
        with pytest.raises(DisallowedQueryError):
            validate("SELECT * FROM users ", ALLOWED)

    def test_rejected_query_attribute(self) -> None:
        with pytest.raises(DisallowedQueryError) as exc_info:
            validate("DELETE FROM users", ALLOWED)
        assert exc_info.value.query == "DELETE FROM users"
        assert isinstance(exc_info.value, QueryValidationError)


class TestStringValidator:
    """引数 1 つの検証関数."""

    def test_string_input(self) -> None:
        assert validate("SELECT * FROM users", starts_with_select) == raw("SELECT * FROM users")

    def test_raw_input(self) -> None:
        marker = raw("SELECT * FROM users")
        assert validate(marker, starts_with_select) is marker

    def test_invalid_string(self) -> None:
        with pytest.raises(InvalidQueryError, match='Query "DELETE FROM users" is not valid'):
            validate("DELETE FROM users", starts_with_select)

    def test_invalid_raw(self) -> None:
        with pytest.raises(InvalidQueryError, match='Query "DELETE FROM users" is not valid'):
            validate(raw("DELETE FROM users"), starts_with_select)

    def test_parameterized_raw(self) -> None:
        """パラメータ付き Raw もそのまま返る."""
        marker = raw("SELECT * FROM users WHERE id = ?", [1])
        result = validate(marker, starts_with_select)
        assert result is marker
        assert result.params == (1,)

    def test_receives_sql_text(self) -> None:
        received: list[object] = []

        def record(text: str) -> bool:
            received.append(text)
            return True

        validate(raw("SELECT 1", [2]), record)
        assert received == ["SELECT 1"]

    def test_default_argument_counts_as_one(self) -> None:
        """デフォルト値付きの引数は数えない."""

        def check(text: str, prefix: str = "SELECT") -> bool:
            return text.startswith(prefix)

        assert validate("SELECT 1", check) == raw("SELECT 1")

    def test_empty_query(self) -> None:
        assert validate("", lambda text: text == "") == raw("")

    def test_truthy_result(self) -> None:
        """真偽値以外の戻り値は真偽として評価される."""
        assert validate("SELECT 1", lambda text: text) == raw("SELECT 1")
        with pytest.raises(InvalidQueryError):
            validate("", lambda text: text)


class TestRawValidator:
    """引数 2 つの検証関数."""

    def test_receives_marker_and_flag(self) -> None:
        received: list[tuple[object, object]] = []

        def check(marker: Raw, parsed: bool) -> bool:
            received.append((marker, parsed))
            return marker.sql.startswith("SELECT")

        marker = raw("SELECT * FROM users")
        assert validate(marker, check) is marker
        assert received == [(marker, True)]

    def test_string_input(self) -> None:
        result = validate("SELECT * FROM users", lambda marker, parsed: marker.sql.startswith("SELECT"))
        assert result == raw("SELECT * FROM users")

    def test_invalid_raw(self) -> None:
        with pytest.raises(InvalidQueryError, match='Query "DELETE FROM users" is not valid'):
            validate(raw("DELETE FROM users"), lambda marker, parsed: marker.sql.startswith("SELECT"))

    def test_invalid_string(self) -> None:
        with pytest.raises(InvalidQueryError, match='Query "DELETE FROM users" is not valid'):
            validate("DELETE FROM users", lambda marker, parsed: marker.sql.startswith("SELECT"))


class TestInvalidValidator:
    """不正な validator."""

    @pytest.mark.parametrize(
        "validator",
        [
            {},
            None,
            "SELECT * FROM users",
            lambda: True,
            lambda a, b, c: True,
        ],
    )
    def test_raises(self, validator: object) -> None:
        with pytest.raises(InvalidValidatorError, match="Invalid validator type"):
            validate("SELECT * FROM users", validator)  # type: ignore[arg-type]

    def test_invalid_query_type(self) -> None:
        with pytest.raises(TypeError, match="Cannot validate int"):
            validate(1, ALLOWED)  # type: ignore[arg-type]


class TestLogging:
    """拒否時のログ出力."""

    def test_allow_list_rejection_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="sqlprep.builder.validate"):
            with pytest.raises(DisallowedQueryError):
                validate("DELETE FROM users", ALLOWED)
        assert "DELETE FROM users" in caplog.text

    def test_validator_rejection_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="sqlprep.builder.validate"):
            with pytest.raises(InvalidQueryError):
                validate("DROP TABLE users", starts_with_select)
        assert "Query rejected by validator: DROP TABLE users" in caplog.text


def test_alias() -> None:
    assert v is validate
