"""The system manager: database directories, catalogue and DDL display."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .context import Context, RecordPrinter
from .defs import DB_META_NAME, LOG_FILE_NAME, ColType, coltype2str
from .disk_manager import DiskManager
from .errors import DatabaseExistsError, DatabaseNotFoundError, UnixError
from .meta import DbMeta

OUTPUT_FILE = "output.txt"


@dataclass
class ColDef:
    """A column as declared in CREATE TABLE."""

    name: str
    type: ColType
    len: int


class SmManager:
    """Manages database directories and the metadata of the open database."""

    def __init__(
        self,
        disk_manager: DiskManager,
        buffer_pool_manager: Any,
        rm_manager: Any = None,
        ix_manager: Any = None,
    ) -> None:
        self.db = DbMeta()
        self.fhs: dict[str, Any] = {}
        self.ihs: dict[str, Any] = {}
        self.disk_manager = disk_manager
        self.buffer_pool_manager = buffer_pool_manager
        self.rm_manager = rm_manager
        self.ix_manager = ix_manager

    def is_dir(self, db_name: str) -> bool:
        return os.path.isdir(db_name)

    def create_db(self, db_name: str) -> None:
        """Create the database directory with empty metadata and an empty log."""
        if self.is_dir(db_name):
            raise DatabaseExistsError(db_name)
        try:
            os.mkdir(db_name)
        except OSError as exc:
            raise UnixError(exc) from exc
        root = Path(db_name)
        (root / DB_META_NAME).write_text(DbMeta(db_name).dumps())
        self.disk_manager.create_file(str(root / LOG_FILE_NAME))

    def drop_db(self, db_name: str) -> None:
        """Remove the database directory and everything in it."""
        if not self.is_dir(db_name):
            raise DatabaseNotFoundError(db_name)
        try:
            shutil.rmtree(db_name)
        except OSError as exc:
            raise UnixError(exc) from exc

    def flush_meta(self) -> None:
        """Write the open database's metadata to the metadata file."""
        Path(DB_META_NAME).write_text(self.db.dumps())

    def show_tables(self, context: Context) -> None:
        """Print the table names into the reply and append them to the output file."""
        printer = RecordPrinter(1)
        printer.print_separator(context)
        printer.print_record(["Tables"], context)
        printer.print_separator(context)
        lines = ["| Tables |\n"]
        for tab in self.db.tables():
            printer.print_record([tab.name], context)
            lines.append(f"| {tab.name} |\n")
        printer.print_separator(context)
        with open(OUTPUT_FILE, "a") as outfile:
            outfile.writelines(lines)

    def desc_table(self, tab_name: str, context: Context) -> None:
        """Print the columns of a table into the reply."""
        tab = self.db.get_table(tab_name)
        printer = RecordPrinter(3)
        printer.print_separator(context)
        printer.print_record(["Field", "Type", "Index"], context)
        printer.print_separator(context)
        for col in tab.cols:
            printer.print_record(
                [col.name, coltype2str(col.type), "YES" if col.index else "NO"], context
            )
        printer.print_separator(context)