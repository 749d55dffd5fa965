import pytest

from rmdb.context import Context, RecordPrinter
from rmdb.defs import BUFFER_LENGTH


def test_append_and_text_round_trip():
    ctx = Context()
    ctx.append("hello ")
    ctx.append("world")
    assert ctx.text() == "hello world"
    assert ctx.offset == len("hello world")


def test_separator_single_column():
    ctx = Context()
    RecordPrinter(1).print_separator(ctx)
    assert ctx.text() == "+" + "-" * 18 + "+\n"


def test_separator_and_record_widths_match():
    ctx = Context()
    printer = RecordPrinter(3)
    printer.print_separator(ctx)
    printer.print_record(["Field", "Type", "Index"], ctx)
    lines = ctx.text().splitlines()
    assert len(lines) == 2
    assert len(lines[0]) == len(lines[1])
    assert lines[1].startswith("| ")
    assert lines[1].endswith(" |")
    for word in ("Field", "Type", "Index"):
        assert word in lines[1]


def test_values_right_aligned():
    ctx = Context()
    RecordPrinter(1).print_record(["Tables"], ctx)
    line = ctx.text()
    assert line.endswith("Tables |\n")
    assert line.startswith("|  ")


def test_long_value_truncated():
    ctx = Context()
    long_value = "abcdefghijklmnopqrstuvwxyz"
    RecordPrinter(1).print_record([long_value], ctx)
    text = ctx.text()
    assert "abcdefghijklm..." in text
    assert long_value not in text


def test_wrong_value_count_raises():
    with pytest.raises(ValueError):
        RecordPrinter(2).print_record(["only"], Context())


def test_zero_columns_raises():
    with pytest.raises(ValueError):
        RecordPrinter(0)


def test_record_count():
    ctx = Context()
    RecordPrinter.print_record_count(3, ctx)
    assert ctx.text() == "Total record(s): 3\n"


def test_output_truncated_when_buffer_full():
    ctx = Context()
    printer = RecordPrinter(2)
    for i in range(1000):
        printer.print_record([str(i), "value"], ctx)
    assert ctx.ellipsis is True
    assert ctx.offset < BUFFER_LENGTH
    RecordPrinter.print_record_count(1000, ctx)
    assert ctx.text().endswith("... ...\nTotal record(s): 1000\n")


def test_no_output_after_truncation():
    ctx = Context()
    printer = RecordPrinter(1)
    while not ctx.ellipsis:
        printer.print_record(["x"], ctx)
    before = ctx.offset
    printer.print_separator(ctx)
    printer.print_record(["y"], ctx)
    assert ctx.offset == before
    assert "y" not in ctx.text()