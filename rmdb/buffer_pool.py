"""A fixed-size cache of file pages kept in memory frames."""

from __future__ import annotations

import threading
from collections import deque

from .defs import INVALID_FILE_ID, INVALID_PAGE_ID, PAGE_SIZE
from .disk_manager import DiskManager
from .page import Page, PageId
from .replacer import LRUReplacer, Replacer


class BufferPoolManager:
    """Caches pages of open files in a fixed number of frames.

    Frames come from a free list first; when none is free, an unpinned
    frame is chosen by the replacement policy and its page written back
    if it is dirty.
    """

    def __init__(self, pool_size: int, disk_manager: DiskManager) -> None:
        self.pool_size = pool_size
        self._pages = [Page() for _ in range(pool_size)]
        self._page_table: dict[PageId, int] = {}
        self._free_list: deque[int] = deque(range(pool_size))
        self._disk = disk_manager
        self._replacer: Replacer = LRUReplacer(pool_size)
        self._latch = threading.Lock()

    @staticmethod
    def mark_dirty(page: Page) -> None:
        """Mark a page as modified."""
        page.is_dirty = True

    def _find_victim(self) -> int | None:
        if self._free_list:
            return self._free_list.popleft()
        return self._replacer.victim()

    def _write_back(self, page: Page) -> None:
        self._disk.write_page(page.page_id.fd, page.page_id.page_no, bytes(page.data))

    def _update_page(self, page: Page, new_page_id: PageId, frame_id: int) -> None:
        if page.is_dirty:
            self._write_back(page)
            page.is_dirty = False
        if self._page_table.get(page.page_id) == frame_id:
            del self._page_table[page.page_id]
        page.page_id = new_page_id
        self._page_table[new_page_id] = frame_id
        page.reset()

    def fetch_page(self, page_id: PageId) -> Page | None:
        """Return the pinned page, reading it from disk if it is not cached.

        Returns None when every frame is pinned.
        """
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is not None:
                self._replacer.pin(frame_id)
                page = self._pages[frame_id]
                page.pin_count += 1
                return page

            frame_id = self._find_victim()
            if frame_id is None:
                return None
            page = self._pages[frame_id]
            self._update_page(page, page_id, frame_id)
            page.data[:] = self._disk.read_page(page_id.fd, page_id.page_no, PAGE_SIZE)
            page.pin_count = 1
            self._replacer.pin(frame_id)
            return page

    def unpin_page(self, page_id: PageId, is_dirty: bool) -> bool:
        """Release one pin on a cached page.

        Returns False if the page is not cached or not pinned.
        """
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return False
            page = self._pages[frame_id]
            if page.pin_count <= 0:
                return False
            page.pin_count -= 1
            if page.pin_count == 0:
                self._replacer.unpin(frame_id)
            if is_dirty:
                self.mark_dirty(page)
            return True

    def flush_page(self, page_id: PageId) -> bool:
        """Write a cached page to disk whether or not it is dirty.

        Returns False if the page is not cached.
        """
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return False
            page = self._pages[frame_id]
            self._write_back(page)
            page.is_dirty = False
            return True

    def new_page(self, fd: int) -> Page | None:
        """Allocate a new page in the file and return it pinned.

        The new page's id is available as ``page.page_id``. Returns None
        when every frame is pinned.
        """
        with self._latch:
            frame_id = self._find_victim()
            if frame_id is None:
                return None
            page = self._pages[frame_id]
            page_id = PageId(fd, self._disk.allocate_page(fd))
            self._update_page(page, page_id, frame_id)
            page.pin_count = 1
            self._replacer.pin(frame_id)
            return page

    def delete_page(self, page_id: PageId) -> bool:
        """Drop a page from the pool, writing it back if dirty.

        Returns True if the page is not cached or was removed, False if it
        is still pinned.
        """
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return True
            page = self._pages[frame_id]
            if page.pin_count != 0:
                return False
            if page.is_dirty:
                self._write_back(page)
            del self._page_table[page_id]
            self._replacer.pin(frame_id)
            self._free_list.append(frame_id)
            page.page_id = PageId(INVALID_FILE_ID, INVALID_PAGE_ID)
            page.pin_count = 0
            page.is_dirty = False
            page.reset()
            return True

    def flush_all_pages(self, fd: int) -> None:
        """Write every dirty cached page of the file to disk."""
        with self._latch:
            for page_id, frame_id in self._page_table.items():
                if page_id.fd != fd:
                    continue
                page = self._pages[frame_id]
                if page.is_dirty:
                    self._write_back(page)
                    page.is_dirty = False