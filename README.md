# rmdb

The storage core of a small relational database engine. It is written in plain
Python and uses only the standard library.

## What it provides

- **Disk access** (`rmdb.disk_manager.DiskManager`): creates, opens, closes and
  removes files. It creates and removes directories. It reads and writes
  4096-byte pages (`write_page`, `read_page`) and hands out page numbers per
  file (`allocate_page`, `set_fd2pageno`, `get_fd2pageno`). It appends to the
  `db.log` file and reads it back (`write_log`, `read_log`).
- **Buffer pool** (`rmdb.buffer_pool.BufferPoolManager`): keeps pages in a fixed
  number of in-memory frames.
  - `new_page(fd)` and `fetch_page(page_id)` return a pinned page, or `None` when
    every frame is pinned.
  - `unpin_page` releases a pin and can mark the page dirty.
  - `flush_page` and `flush_all_pages` write pages to disk.
  - `delete_page` drops an unpinned page from the pool.
- **Replacement policy** (`rmdb.replacer.LRUReplacer`): the frame that was
  unpinned longest ago is evicted first. `victim()` returns that frame id, or
  `None` when no frame can be evicted. `len()` gives the number of evictable
  frames.
- **Pages** (`rmdb.page.PageId`, `rmdb.page.Page`): a page id is a file
  descriptor plus a page number. A page is a 4 KiB `bytearray` with dirty and
  pin bookkeeping. Its `page_lsn` property reads and writes the log sequence
  number held in the first four bytes.
- **Catalog metadata** (`rmdb.meta`): `ColMeta`, `IndexMeta`, `TabMeta` and
  `DbMeta`. Each has a whitespace-separated text form: `dumps()` writes it, and
  `DbMeta.loads()` reads a whole database back. Lookups that miss raise
  `TableNotFoundError`, `ColumnNotFoundError` or `IndexNotFoundError`.
- **System manager** (`rmdb.system.SmManager`):
  - `create_db` makes a database directory holding an empty `db.meta` and an
    empty `db.log`.
  - `drop_db` removes the directory.
  - `flush_meta` writes the open catalog to `db.meta` in the current directory.
  - `show_tables` and `desc_table` print result tables.
- **Result formatting** (`rmdb.context.Context`, `rmdb.context.RecordPrinter`):
  writes fixed-width result tables into a context's reply buffer.
  - The reply is bounded at 8192 bytes. Output that would not leave room for
    the record count is dropped.
  - When output is dropped, `print_record_count` prefixes the count with
    `... ...`.
- **Query values and conditions** (`rmdb.common`): `TabCol`, `Value` (with its
  fixed-length raw encoding from `init_raw`), `CompOp`, `Condition` and
  `SetClause`.
- **Transactions** (`rmdb.transaction`): the `Transaction` record with its state,
  write set and lock set. The module also has `WriteRecord` and `LockDataId`
  (`table`, `record`, `key`). `TransactionAbortException` describes its reason
  through `info()`.
- **Errors** (`rmdb.errors`): every failure is raised as a subclass of
  `RMDBError`. Each message starts with `Error: `.

## What it does not do

This package covers the storage and catalog layers only. It has none of the
following:

- a command, a network server or an interactive prompt;
- an SQL parser, planner or executor;
- a record file manager or any index structure;
- a lock manager, transaction manager or crash recovery.

`SmManager` does not open or close databases, and it does not create or drop
tables or indexes. Callers fill `SmManager.db` themselves, either directly or
with `DbMeta.loads`.

## Installation

```
pip install .
```

To also install the test dependencies:

```
pip install ".[test]"
```

## Example

```python
from rmdb.disk_manager import DiskManager
from rmdb.buffer_pool import BufferPoolManager
from rmdb.page import PageId

disk = DiskManager()
disk.create_file("basic")
fd = disk.open_file("basic")

pool = BufferPoolManager(10, disk)
page = pool.new_page(fd)
page.data[:5] = b"Hello"
pool.unpin_page(page.page_id, True)
pool.flush_all_pages(fd)

again = pool.fetch_page(PageId(fd, 0))
assert bytes(again.data[:5]) == b"Hello"
pool.unpin_page(again.page_id, False)

disk.close_file(fd)
```

The replacer hands frames back in least-recently-unpinned order:

```python
from rmdb.replacer import LRUReplacer

lru = LRUReplacer(7)
for frame in (1, 2, 3):
    lru.unpin(frame)
assert lru.victim() == 1
assert len(lru) == 2
```

Catalog metadata survives a round trip through its text form:

```python
from rmdb.defs import ColType
from rmdb.meta import ColMeta, DbMeta, TabMeta

db = DbMeta("shop")
db.set_tab_meta("items", TabMeta("items", [ColMeta("items", "id", ColType.INT, 4, 0)]))
assert DbMeta.loads(db.dumps()) == db
```

## Running the tests

```
pytest
```