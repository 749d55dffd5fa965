"""Per-statement execution context and the tabular result printer."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .defs import BUFFER_LENGTH

RECORD_COUNT_LENGTH = 40


@dataclass
class Context:
    """What a statement runs with: managers, transaction and the reply buffer."""

    lock_mgr: Any = None
    log_mgr: Any = None
    txn: Any = None
    ellipsis: bool = False
    data: bytearray = field(default_factory=bytearray)

    @property
    def offset(self) -> int:
        """Number of bytes written to the reply so far."""
        return len(self.data)

    def append(self, text: str) -> None:
        """Append text to the reply unconditionally."""
        self.data += text.encode()

    def text(self) -> str:
        """The reply written so far."""
        return self.data.decode()


class RecordPrinter:
    """Formats rows as a fixed-width table into a context's reply buffer.

    Output that would not leave room for the record count in the reply
    buffer is dropped and the context is marked as truncated.
    """

    COL_WIDTH = 16

    def __init__(self, num_cols: int) -> None:
        if num_cols <= 0:
            raise ValueError("a table needs at least one column")
        self.num_cols = num_cols

    @staticmethod
    def _emit(context: Context, text: str, mark_truncated: bool = True) -> None:
        size = len(text.encode())
        if not context.ellipsis and context.offset + RECORD_COUNT_LENGTH + size < BUFFER_LENGTH:
            context.append(text)
        elif mark_truncated:
            context.ellipsis = True

    def print_separator(self, context: Context) -> None:
        for _ in range(self.num_cols):
            self._emit(context, "+" + "-" * (self.COL_WIDTH + 2))
        self._emit(context, "+\n")

    def print_record(self, values: Iterable[str], context: Context) -> None:
        values = list(values)
        if len(values) != self.num_cols:
            raise ValueError(f"expected {self.num_cols} values, got {len(values)}")
        for col in values:
            if len(col) > self.COL_WIDTH:
                col = col[: self.COL_WIDTH - 3] + "..."
            self._emit(context, f"| {col:>{self.COL_WIDTH}} ")
        self._emit(context, "|\n", mark_truncated=False)

    @staticmethod
    def print_record_count(num_records: int, context: Context) -> None:
        text = "... ...\n" if context.ellipsis else ""
        text += f"Total record(s): {num_records}\n"
        context.append(text)