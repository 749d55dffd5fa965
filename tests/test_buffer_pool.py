import random
import threading

import pytest

from rmdb.buffer_pool import BufferPoolManager
from rmdb.defs import PAGE_SIZE
from rmdb.disk_manager import DiskManager
from rmdb.errors import DbFileExistsError, DbFileNotFoundError
from rmdb.page import PageId


@pytest.fixture
def disk(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return DiskManager()


@pytest.fixture
def opened(disk):
    disk.create_file("basic")
    fd = disk.open_file("basic")
    yield disk, fd
    disk.close_file(fd)


def test_sample(opened):
    disk, fd = opened
    pool_size = 10
    bpm = BufferPoolManager(pool_size, disk)

    page0 = bpm.new_page(fd)
    assert page0 is not None
    assert page0.page_id.page_no == 0

    page0.data[:6] = b"Hello\0"
    assert bytes(page0.data).split(b"\0")[0] == b"Hello"

    for _ in range(1, pool_size):
        assert bpm.new_page(fd) is not None
    for _ in range(pool_size, pool_size * 2):
        assert bpm.new_page(fd) is None

    for i in range(5):
        assert bpm.unpin_page(PageId(fd, i), True) is True
    for _ in range(4):
        assert bpm.new_page(fd) is not None

    page0 = bpm.fetch_page(PageId(fd, 0))
    assert page0 is not None
    assert bytes(page0.data).split(b"\0")[0] == b"Hello"
    assert bpm.unpin_page(PageId(fd, 0), True) is True

    assert bpm.new_page(fd) is not None
    assert bpm.fetch_page(PageId(fd, 0)) is None

    bpm.flush_all_pages(fd)


def test_concurrency(opened):
    disk, fd = opened
    runs = 10
    threads_per_run = 5
    pages_per_thread = 10
    errors: list[str] = []
    seen: list[int] = []
    deleted: list[bool] = []

    def worker(bpm):
        page_ids = []
        for _ in range(pages_per_thread):
            page = bpm.new_page(fd)
            if page is None:
                errors.append("new_page failed")
                return
            text = str(page.page_id.page_no).encode() + b"\0"
            page.data[: len(text)] = text
            page_ids.append(page.page_id)
        for pid in page_ids:
            if not bpm.unpin_page(pid, True):
                errors.append("unpin failed")
        for pid in page_ids:
            page = bpm.fetch_page(pid)
            if page is None:
                errors.append("fetch failed")
                return
            seen.append(int(bytes(page.data).split(b"\0")[0]))
            if not bpm.unpin_page(pid, True):
                errors.append("unpin after fetch failed")
        for pid in page_ids:
            deleted.append(bpm.delete_page(pid))
        bpm.flush_all_pages(fd)

    for _ in range(runs):
        bpm = BufferPoolManager(50, disk)
        threads = [threading.Thread(target=worker, args=(bpm,)) for _ in range(threads_per_run)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

    total = runs * threads_per_run * pages_per_thread
    assert errors == []
    assert sorted(seen) == list(range(total))
    assert deleted == [True] * total
    assert disk.get_fd2pageno(fd) == total


def test_storage_random(disk):
    rng = random.Random(1234)
    max_files = 4
    max_pages = 16
    bpm = BufferPoolManager(max_files * max_pages // 2, disk)

    mock: dict[int, bytearray] = {}
    fd2name: dict[int, str] = {}
    for i in range(max_files):
        filename = f"{i}.txt"
        with pytest.raises(DbFileNotFoundError):
            disk.open_file(filename)
        disk.create_file(filename)
        assert disk.is_file(filename)
        with pytest.raises(DbFileExistsError):
            disk.create_file(filename)
        fd = disk.open_file(filename)
        mock[fd] = bytearray(PAGE_SIZE * max_pages)
        fd2name[fd] = filename
        disk.set_fd2pageno(fd, 0)

    def mock_page(fd, page_no):
        return bytes(mock[fd][page_no * PAGE_SIZE:(page_no + 1) * PAGE_SIZE])

    def check_cache(fd, page_no):
        page = bpm.fetch_page(PageId(fd, page_no))
        assert page is not None
        assert bytes(page.data) == mock_page(fd, page_no)
        assert bpm.unpin_page(PageId(fd, page_no), False)

    def check_disk(fd, page_no):
        assert disk.read_page(fd, page_no, PAGE_SIZE) == mock_page(fd, page_no)

    def rand_buf():
        return bytes(rng.getrandbits(8) for _ in range(PAGE_SIZE))

    num_pages = 0
    for fd in list(mock):
        for i in range(max_pages):
            buf = rand_buf()
            page = bpm.new_page(fd)
            assert page is not None
            assert page.page_id.page_no == i
            page.data[:] = buf
            assert bpm.unpin_page(page.page_id, True)
            mock[fd][i * PAGE_SIZE:(i + 1) * PAGE_SIZE] = buf
            num_pages += 1
            check_cache(fd, i)
    assert num_pages == max_files * max_pages

    for fd in list(mock):
        for page_no in range(max_pages):
            check_cache(fd, page_no)

    for fd in list(fd2name):
        bpm.flush_all_pages(fd)
        for page_no in range(max_pages):
            check_disk(fd, page_no)

    for _ in range(300):
        fd = rng.choice(list(mock))
        page_no = rng.randrange(max_pages)
        page = bpm.fetch_page(PageId(fd, page_no))
        assert page is not None
        assert bytes(page.data) == mock_page(fd, page_no)
        buf = rand_buf()
        page.data[:] = buf
        mock[fd][page_no * PAGE_SIZE:(page_no + 1) * PAGE_SIZE] = buf
        assert bpm.unpin_page(page.page_id, True)

        if rng.randrange(10) == 0:
            assert bpm.flush_page(page.page_id)
            check_disk(fd, page_no)
        if rng.randrange(100) == 0:
            bpm.flush_all_pages(fd)
        if rng.randrange(100) == 0:
            bpm.flush_all_pages(fd)
            disk.close_file(fd)
            filename = fd2name.pop(fd)
            buf_all = mock.pop(fd)
            fd = disk.open_file(filename)
            mock[fd] = buf_all
            fd2name[fd] = filename
        check_cache(fd, page_no)

    for fd, filename in list(fd2name.items()):
        bpm.flush_all_pages(fd)
        for page_no in range(max_pages):
            check_disk(fd, page_no)
        disk.close_file(fd)
        disk.destroy_file(filename)
        with pytest.raises(DbFileNotFoundError):
            disk.destroy_file(filename)


def test_unpin_unknown_page_returns_false(opened):
    disk, fd = opened
    bpm = BufferPoolManager(4, disk)
    assert bpm.unpin_page(PageId(fd, 3), False) is False


def test_unpin_twice_returns_false(opened):
    disk, fd = opened
    bpm = BufferPoolManager(4, disk)
    page = bpm.new_page(fd)
    assert bpm.unpin_page(page.page_id, False) is True
    assert bpm.unpin_page(page.page_id, False) is False


def test_flush_unknown_page_returns_false(opened):
    disk, fd = opened
    bpm = BufferPoolManager(4, disk)
    assert bpm.flush_page(PageId(fd, 0)) is False


def test_flush_page_writes_data(opened):
    disk, fd = opened
    bpm = BufferPoolManager(4, disk)
    page = bpm.new_page(fd)
    page.data[:4] = b"abcd"
    assert bpm.flush_page(page.page_id) is True
    assert page.is_dirty is False
    assert disk.read_page(fd, 0, 4) == b"abcd"


def test_delete_pinned_page_fails(opened):
    disk, fd = opened
    bpm = BufferPoolManager(4, disk)
    page = bpm.new_page(fd)
    assert bpm.delete_page(page.page_id) is False
    assert bpm.unpin_page(page.page_id, True) is True
    assert bpm.delete_page(page.page_id) is True
    assert bpm.delete_page(page.page_id) is True


def test_deleted_dirty_page_is_written(opened):
    disk, fd = opened
    bpm = BufferPoolManager(2, disk)
    page = bpm.new_page(fd)
    page.data[:3] = b"xyz"
    pid = page.page_id
    bpm.unpin_page(pid, True)
    assert bpm.delete_page(pid) is True
    fetched = bpm.fetch_page(pid)
    assert bytes(fetched.data[:3]) == b"xyz"


def test_deleted_frame_reused_once(opened):
    disk, fd = opened
    bpm = BufferPoolManager(2, disk)
    first = bpm.new_page(fd)
    bpm.unpin_page(first.page_id, True)
    assert bpm.delete_page(first.page_id)
    a = bpm.new_page(fd)
    b = bpm.new_page(fd)
    assert a is not None and b is not None
    assert a is not b
    assert bpm.new_page(fd) is None


def test_mark_dirty(opened):
    disk, fd = opened
    bpm = BufferPoolManager(1, disk)
    page = bpm.new_page(fd)
    assert page.is_dirty is False
    BufferPoolManager.mark_dirty(page)
    assert page.is_dirty is True


def test_fetch_increments_pin_count(opened):
    disk, fd = opened
    bpm = BufferPoolManager(2, disk)
    page = bpm.new_page(fd)
    again = bpm.fetch_page(page.page_id)
    assert again is page
    assert page.pin_count == 2