"""データベースハンドルパッケージ."""

from sqlprep.handle.protocol import PreparedHandle, PreparedStatement
from sqlprep.handle.sqlite import RunResult, SqliteHandle, SqliteStatement

__all__ = ["PreparedHandle", "PreparedStatement", "RunResult", "SqliteHandle", "SqliteStatement"]
