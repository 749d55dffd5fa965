"""Values, column references, conditions and set clauses used by queries."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field

from .defs import ColType
from .errors import StringOverflowError

_INT = struct.Struct("<i")
_FLOAT = struct.Struct("<f")


@dataclass(frozen=True, order=True)
class TabCol:
    """A column qualified by its table; ordered by (table, column)."""

    tab_name: str
    col_name: str


@dataclass
class Value:
    """A typed literal, optionally with its fixed-length raw encoding."""

    type: ColType | None = None
    int_val: int = 0
    float_val: float = 0.0
    str_val: str = ""
    raw: bytes | None = None

    def set_int(self, value: int) -> None:
        if not -(2**31) <= value < 2**31:
            raise OverflowError(f"integer out of 32-bit range: {value}")
        self.type = ColType.INT
        self.int_val = value

    def set_float(self, value: float) -> None:
        self.type = ColType.FLOAT
        self.float_val = _FLOAT.unpack(_FLOAT.pack(value))[0]

    def set_str(self, value: str) -> None:
        self.type = ColType.STRING
        self.str_val = value

    def init_raw(self, length: int) -> None:
        """Build the raw column bytes of the given length from the value."""
        if self.raw is not None:
            raise ValueError("raw value already initialised")
        if self.type is ColType.INT:
            if length != _INT.size:
                raise ValueError(f"INT column needs {_INT.size} bytes, got {length}")
            self.raw = _INT.pack(self.int_val)
        elif self.type is ColType.FLOAT:
            if length != _FLOAT.size:
                raise ValueError(f"FLOAT column needs {_FLOAT.size} bytes, got {length}")
            self.raw = _FLOAT.pack(self.float_val)
        elif self.type is ColType.STRING:
            encoded = self.str_val.encode()
            if length < len(encoded):
                raise StringOverflowError()
            self.raw = encoded.ljust(length, b"\0")
        else:
            raise ValueError("value has no type")


class CompOp(enum.IntEnum):
    EQ = 0
    NE = 1
    LT = 2
    GT = 3
    LE = 4
    GE = 5


@dataclass
class Condition:
    """A comparison of a column with another column or with a value."""

    lhs_col: TabCol
    op: CompOp
    is_rhs_val: bool = False
    rhs_col: TabCol | None = None
    rhs_val: Value = field(default_factory=Value)


@dataclass
class SetClause:
    """An assignment ``lhs = rhs`` of an UPDATE statement."""

    lhs: TabCol
    rhs: Value