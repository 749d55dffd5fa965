"""Exception hierarchy of the database engine.

Every error message starts with ``"Error: "`` followed by a description.
"""

from __future__ import annotations

import os
from collections.abc import Iterable


class RMDBError(Exception):
    """Base class of every database error."""

    def __init__(self, msg: str = "") -> None:
        self.msg = "Error: " + msg
        super().__init__(self.msg)

    def __str__(self) -> str:
        return self.msg


class InternalError(RMDBError):
    """An unexpected internal condition."""

    def __init__(self, msg: str) -> None:
        super().__init__(msg)


class UnixError(RMDBError):
    """A failed operating-system call."""

    def __init__(self, cause: OSError | int | None = None) -> None:
        if isinstance(cause, OSError):
            self.errno = cause.errno
            text = cause.strerror or str(cause)
        elif isinstance(cause, int):
            self.errno = cause
            text = os.strerror(cause)
        else:
            self.errno = None
            text = "Unknown error"
        super().__init__(text)


class FileOpenError(RMDBError):
    def __init__(self, path: str) -> None:
        super().__init__("File is open: " + path)


class FileNotOpenError(RMDBError):
    def __init__(self, fd: int) -> None:
        super().__init__("Invalid file descriptor: " + str(fd))


class FileNotClosedError(RMDBError):
    def __init__(self, filename: str) -> None:
        super().__init__("File is opened: " + filename)


class DbFileExistsError(RMDBError):
    def __init__(self, filename: str) -> None:
        super().__init__("File already exists: " + filename)


class DbFileNotFoundError(RMDBError):
    def __init__(self, filename: str) -> None:
        super().__init__("File not found: " + filename)


class RecordNotFoundError(RMDBError):
    def __init__(self, page_no: int, slot_no: int) -> None:
        super().__init__(f"Record not found: ({page_no},{slot_no})")


class InvalidRecordSizeError(RMDBError):
    def __init__(self, record_size: int) -> None:
        super().__init__("Invalid record size: " + str(record_size))


class InvalidMetaDataError(RMDBError):
    def __init__(self, db_name: str) -> None:
        super().__init__("Invalid meta data from database " + db_name)


class InvalidColLengthError(RMDBError):
    def __init__(self, col_len: int) -> None:
        super().__init__("Invalid column length: " + str(col_len))


class IndexEntryNotFoundError(RMDBError):
    def __init__(self) -> None:
        super().__init__("Index entry not found")


class DatabaseNotFoundError(RMDBError):
    def __init__(self, db_name: str) -> None:
        super().__init__("Database not found: " + db_name)


class DatabaseExistsError(RMDBError):
    def __init__(self, db_name: str) -> None:
        super().__init__("Database already exists: " + db_name)


class TableNotFoundError(RMDBError):
    def __init__(self, tab_name: str) -> None:
        super().__init__("Table not found: " + tab_name)


class TableExistsError(RMDBError):
    def __init__(self, tab_name: str) -> None:
        super().__init__("Table already exists: " + tab_name)


class ColumnNotFoundError(RMDBError):
    def __init__(self, col_name: str) -> None:
        super().__init__("Column not found: " + col_name)


def _index_columns(tab_name: str, col_names: Iterable[str]) -> str:
    return f"{tab_name}.({', '.join(col_names)})"


class IndexNotFoundError(RMDBError):
    def __init__(self, tab_name: str, col_names: Iterable[str]) -> None:
        super().__init__("Index not found: " + _index_columns(tab_name, col_names))


class IndexExistsError(RMDBError):
    def __init__(self, tab_name: str, col_names: Iterable[str]) -> None:
        super().__init__("Index already exists: " + _index_columns(tab_name, col_names))


class InvalidValueCountError(RMDBError):
    def __init__(self) -> None:
        super().__init__("Invalid value count")


class StringOverflowError(RMDBError):
    def __init__(self) -> None:
        super().__init__("String is too long")


class IncompatibleTypeError(RMDBError):
    def __init__(self, lhs: str, rhs: str) -> None:
        super().__init__("Incompatible type error: lhs " + lhs + ", rhs " + rhs)


class AmbiguousColumnError(RMDBError):
    def __init__(self, col_name: str) -> None:
        super().__init__("Ambiguous column: " + col_name)


class PageNotExistError(RMDBError):
    def __init__(self, table_name: str, page_no: int) -> None:
        super().__init__(f"Page {page_no} in table {table_name}not exits")


class NullptrError(RMDBError):
    def __init__(self, table_name: str | None = None, page_no: int | None = None) -> None:
        if table_name is None:
            super().__init__("ptr is null!")
        else:
            super().__init__("table " + table_name + ": ptr is null!")


class IndexAlreadyExistsError(RMDBError):
    def __init__(self, index_name: str) -> None:
        super().__init__("index " + index_name + " is already exists.")


class OpenDatabaseError(RMDBError):
    def __init__(self, db_name: str, reason: str) -> None:
        super().__init__("open database " + db_name + "error: " + reason)


class DropTableError(RMDBError):
    def __init__(self, table: str, reason: str) -> None:
        super().__init__("Drop table " + table + "error: " + reason)


class DropIndexError(RMDBError):
    def __init__(self, index_name: str, reason: str) -> None:
        super().__init__("Drop index " + index_name + "error: " + reason)


class InvalidAggError(RMDBError):
    def __init__(self, col: str, reason: str) -> None:
        super().__init__("Can not use " + col + " with " + reason)


class IndexEntryAlreadyExistError(RMDBError):
    def __init__(self) -> None:
        super().__init__("Index entry already exists")