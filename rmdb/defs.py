"""Basic definitions and configuration constants."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass

BUFFER_LENGTH = 8192

INVALID_FILE_ID = -1
INVALID_FRAME_ID = -1
INVALID_PAGE_ID = -1
INVALID_TXN_ID = -1
INVALID_TIMESTAMP = -1
INVALID_LSN = -1
HEADER_PAGE_ID = 0
PAGE_SIZE = 4096
BUFFER_POOL_SIZE = 65536
LOG_BUFFER_SIZE = 1024 * PAGE_SIZE
BUCKET_SIZE = 50

LOG_FILE_NAME = "db.log"
REPLACER_TYPE = "LRU"
DB_META_NAME = "db.meta"


@dataclass(frozen=True)
class Rid:
    """Location of a record: page number and slot number."""

    page_no: int
    slot_no: int


class ColType(enum.IntEnum):
    INT = 0
    FLOAT = 1
    STRING = 2


_COLTYPE_NAMES = {
    ColType.INT: "INT",
    ColType.FLOAT: "FLOAT",
    ColType.STRING: "STRING",
}


def coltype2str(col_type: ColType | int) -> str:
    """Return the display name of a column type."""
    return _COLTYPE_NAMES[ColType(col_type)]


class RecScan(ABC):
    """A cursor over record ids; iterating it yields the remaining ids."""

    @abstractmethod
    def next(self) -> None:
        """Advance to the next record."""

    @abstractmethod
    def is_end(self) -> bool:
        """Whether the scan is exhausted."""

    @abstractmethod
    def rid(self) -> Rid:
        """The id of the current record."""

    def __iter__(self) -> Iterator[Rid]:
        while not self.is_end():
            yield self.rid()
            self.next()