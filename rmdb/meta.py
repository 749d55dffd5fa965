"""Catalogue metadata of databases, tables, columns and indexes.

Metadata is stored as whitespace-separated text. Names must not contain
whitespace.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from .defs import ColType
from .errors import (
    ColumnNotFoundError,
    IndexNotFoundError,
    InvalidMetaDataError,
    TableNotFoundError,
)


def _take(tokens: Iterator[str]) -> str:
    try:
        return next(tokens)
    except StopIteration:
        raise ValueError("unexpected end of metadata") from None


def _take_int(tokens: Iterator[str]) -> int:
    return int(_take(tokens))


@dataclass
class ColMeta:
    """A column of a table: type, length and offset within a record."""

    tab_name: str
    name: str
    type: ColType
    len: int
    offset: int
    index: bool = False

    def dumps(self) -> str:
        return (
            f"{self.tab_name} {self.name} {int(self.type)} {self.len} "
            f"{self.offset} {int(self.index)}"
        )

    @classmethod
    def from_tokens(cls, tokens: Iterator[str]) -> ColMeta:
        """Read a column from a stream of tokens."""
        return cls(
            tab_name=_take(tokens),
            name=_take(tokens),
            type=ColType(_take_int(tokens)),
            len=_take_int(tokens),
            offset=_take_int(tokens),
            index=_take_int(tokens) != 0,
        )


@dataclass
class IndexMeta:
    """An index over one or more columns of a table."""

    tab_name: str
    col_tot_len: int
    col_num: int
    cols: list[ColMeta] = field(default_factory=list)

    def dumps(self) -> str:
        head = f"{self.tab_name} {self.col_tot_len} {self.col_num}"
        return "".join([head, *("\n" + col.dumps() for col in self.cols)])

    @classmethod
    def from_tokens(cls, tokens: Iterator[str]) -> IndexMeta:
        """Read an index and its columns from a stream of tokens."""
        tab_name = _take(tokens)
        col_tot_len = _take_int(tokens)
        col_num = _take_int(tokens)
        cols = [ColMeta.from_tokens(tokens) for _ in range(col_num)]
        return cls(tab_name, col_tot_len, col_num, cols)

    def _matches(self, col_names: Sequence[str]) -> bool:
        return self.col_num == len(col_names) and all(
            col.name == name for col, name in zip(self.cols, col_names)
        )


@dataclass
class TabMeta:
    """A table: its columns and the indexes built on it."""

    name: str = ""
    cols: list[ColMeta] = field(default_factory=list)
    indexes: list[IndexMeta] = field(default_factory=list)

    def is_col(self, col_name: str) -> bool:
        return any(col.name == col_name for col in self.cols)

    def is_index(self, col_names: Sequence[str]) -> bool:
        """Whether an index over exactly these columns, in order, exists."""
        return any(index._matches(col_names) for index in self.indexes)

    def get_index_meta(self, col_names: Sequence[str]) -> IndexMeta:
        for index in self.indexes:
            if index._matches(col_names):
                return index
        raise IndexNotFoundError(self.name, col_names)

    def get_col(self, col_name: str) -> ColMeta:
        for col in self.cols:
            if col.name == col_name:
                return col
        raise ColumnNotFoundError(col_name)

    def dumps(self) -> str:
        parts = [f"{self.name}\n{len(self.cols)}\n"]
        parts.extend(col.dumps() + "\n" for col in self.cols)
        parts.append(f"{len(self.indexes)}\n")
        parts.extend(index.dumps() + "\n" for index in self.indexes)
        return "".join(parts)

    @classmethod
    def from_tokens(cls, tokens: Iterator[str]) -> TabMeta:
        """Read a table, its columns and its indexes from a stream of tokens."""
        name = _take(tokens)
        cols = [ColMeta.from_tokens(tokens) for _ in range(_take_int(tokens))]
        indexes = [IndexMeta.from_tokens(tokens) for _ in range(_take_int(tokens))]
        return cls(name, cols, indexes)


@dataclass
class DbMeta:
    """A database: its name and its tables, kept in name order when written."""

    name: str = ""
    tabs: dict[str, TabMeta] = field(default_factory=dict)

    def is_table(self, tab_name: str) -> bool:
        return tab_name in self.tabs

    def set_tab_meta(self, tab_name: str, meta: TabMeta) -> None:
        self.tabs[tab_name] = meta

    def get_table(self, tab_name: str) -> TabMeta:
        try:
            return self.tabs[tab_name]
        except KeyError:
            raise TableNotFoundError(tab_name) from None

    def tables(self) -> list[TabMeta]:
        """The tables ordered by name."""
        return [self.tabs[name] for name in sorted(self.tabs)]

    def dumps(self) -> str:
        parts = [f"{self.name}\n{len(self.tabs)}\n"]
        parts.extend(tab.dumps() + "\n" for tab in self.tables())
        return "".join(parts)

    @classmethod
    def loads(cls, text: str) -> DbMeta:
        """Parse database metadata written by :meth:`dumps`."""
        tokens = iter(text.split())
        name = ""
        try:
            name = _take(tokens)
            db = cls(name)
            for _ in range(_take_int(tokens)):
                tab = TabMeta.from_tokens(tokens)
                db.tabs[tab.name] = tab
        except ValueError as exc:
            raise InvalidMetaDataError(name) from exc
        return db