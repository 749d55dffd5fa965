"""Page identifiers and in-memory pages."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .defs import INVALID_FILE_ID, INVALID_PAGE_ID, PAGE_SIZE

_LSN = struct.Struct("<i")


@dataclass(frozen=True)
class PageId:
    """A page within an open file: file descriptor and page number."""

    fd: int
    page_no: int = INVALID_PAGE_ID

    def __lt__(self, other: PageId) -> bool:
        if self.fd < other.fd:
            return True
        return self.page_no < other.page_no

    def __str__(self) -> str:
        return f"{{fd: {self.fd} page_no: {self.page_no}}}"

    def key(self) -> int:
        """A single integer combining fd and page number."""
        return (self.fd << 16) | self.page_no


class Page:
    """A page-sized block of data with its buffer bookkeeping."""

    OFFSET_PAGE_START = 0
    OFFSET_LSN = 0
    OFFSET_PAGE_HDR = 4

    def __init__(self, page_id: PageId | None = None) -> None:
        self.page_id = page_id if page_id is not None else PageId(INVALID_FILE_ID, INVALID_PAGE_ID)
        self.data = bytearray(PAGE_SIZE)
        self.is_dirty = False
        self.pin_count = 0

    @property
    def page_lsn(self) -> int:
        """The log sequence number stored at the start of the page."""
        return _LSN.unpack_from(self.data, self.OFFSET_LSN)[0]

    @page_lsn.setter
    def page_lsn(self, lsn: int) -> None:
        _LSN.pack_into(self.data, self.OFFSET_LSN, lsn)

    def reset(self) -> None:
        """Fill the page data with zero bytes."""
        self.data[:] = bytes(PAGE_SIZE)

    def __repr__(self) -> str:
        return f"Page({self.page_id}, dirty={self.is_dirty}, pins={self.pin_count})"