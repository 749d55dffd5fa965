"""Transactions, their write records, lock identifiers and abort reasons."""

from __future__ import annotations

import enum
import threading
from collections import deque
from dataclasses import dataclass, field

from .defs import INVALID_LSN, INVALID_TIMESTAMP, Rid
from .page import Page

_INT64_MASK = (1 << 64) - 1
_INT64_SIGN = 1 << 63


def _to_int64(value: int) -> int:
    value &= _INT64_MASK
    return value - (1 << 64) if value & _INT64_SIGN else value


class TransactionState(enum.Enum):
    DEFAULT = 0
    GROWING = 1
    SHRINKING = 2
    COMMITTED = 3
    ABORTED = 4


class IsolationLevel(enum.Enum):
    READ_UNCOMMITTED = 0
    REPEATABLE_READ = 1
    READ_COMMITTED = 2
    SERIALIZABLE = 3


class WType(enum.IntEnum):
    """Kind of write a transaction performed."""

    INSERT_TUPLE = 0
    DELETE_TUPLE = 1
    UPDATE_TUPLE = 2


@dataclass
class WriteRecord:
    """A write kept for rollback.

    Inserts carry only the record id; deletes and updates also carry the
    record's previous contents.
    """

    wtype: WType
    tab_name: str
    rid: Rid
    record: bytes | None = None


class LockDataType(enum.IntEnum):
    """Granularity of a lock: a whole table or a single record."""

    TABLE = 0
    RECORD = 1


@dataclass(frozen=True)
class LockDataId:
    """Identifies the object a lock is taken on."""

    fd: int
    rid: Rid
    type: LockDataType

    @classmethod
    def table(cls, fd: int) -> LockDataId:
        """A table-level lock target."""
        return cls(fd, Rid(-1, -1), LockDataType.TABLE)

    @classmethod
    def record(cls, fd: int, rid: Rid) -> LockDataId:
        """A record-level lock target."""
        return cls(fd, rid, LockDataType.RECORD)

    def key(self) -> int:
        """A signed 64-bit integer identifying the lock target."""
        if self.type is LockDataType.TABLE:
            return _to_int64(self.fd)
        return _to_int64(
            (int(self.type) << 63)
            | (self.fd << 31)
            | (self.rid.page_no << 16)
            | self.rid.slot_no
        )


class AbortReason(enum.Enum):
    LOCK_ON_SHRINKING = 0
    UPGRADE_CONFLICT = 1
    DEADLOCK_PREVENTION = 2


class TransactionAbortException(Exception):
    """Raised when a transaction has to be rolled back."""

    def __init__(self, txn_id: int, abort_reason: AbortReason) -> None:
        self.txn_id = txn_id
        self.abort_reason = abort_reason
        super().__init__(self.info())

    def info(self) -> str:
        """A description of why the transaction was aborted."""
        if self.abort_reason is AbortReason.LOCK_ON_SHRINKING:
            return (
                f"Transaction {self.txn_id} aborted because it cannot request locks "
                "on SHRINKING phase\n"
            )
        if self.abort_reason is AbortReason.UPGRADE_CONFLICT:
            return (
                f"Transaction {self.txn_id} aborted because another transaction is "
                "waiting for upgrading\n"
            )
        if self.abort_reason is AbortReason.DEADLOCK_PREVENTION:
            return f"Transaction {self.txn_id} aborted for deadlock prevention\n"
        return "Transaction aborted\n"

    def __str__(self) -> str:
        return self.info()


@dataclass
class Transaction:
    """A transaction: its state, writes, locks and latched index pages.

    ``txn_mode`` is True for an explicit transaction and False for the
    implicit transaction of a single statement.
    """

    txn_id: int
    isolation_level: IsolationLevel = IsolationLevel.SERIALIZABLE
    state: TransactionState = TransactionState.DEFAULT
    txn_mode: bool = False
    start_ts: int = INVALID_TIMESTAMP
    prev_lsn: int = INVALID_LSN
    thread_id: int = field(default_factory=threading.get_ident)
    write_set: deque[WriteRecord] = field(default_factory=deque)
    lock_set: set[LockDataId] = field(default_factory=set)
    index_latch_page_set: deque[Page] = field(default_factory=deque)
    index_deleted_page_set: deque[Page] = field(default_factory=deque)

    def append_write_record(self, write_record: WriteRecord) -> None:
        self.write_set.append(write_record)

    def append_index_deleted_page(self, page: Page) -> None:
        self.index_deleted_page_set.append(page)

    def append_index_latch_page(self, page: Page) -> None:
        self.index_latch_page_set.append(page)