from commands import BOTTOM, DOWN, HALF_PAGE_DOWN, HALF_PAGE_UP, TOP, UP, Dir


class ScrollWindow:
    """Scroll offset over ``total_rows`` lines shown ``page_size`` at a time."""

    def __init__(self, total_rows: int = 0, page_size: int = 1):
        self.offset = 0
        self.total_rows = max(0, total_rows)
        self.page_size = max(1, page_size)
        self._clamp()

    def _clamp(self):
        self.offset = max(0, min(self.offset, self.max_offset))

    @property
    def max_offset(self) -> int:
        return max(0, self.total_rows - self.page_size)

    @property
    def page_end(self) -> int:
        return min(self.total_rows, self.offset + self.page_size)

    @property
    def percent(self) -> int:
        return round(self.offset / max(self.max_offset, 1) * 100)

    def update_total_rows(self, total_rows: int):
        self.total_rows = max(0, total_rows)
        self._clamp()

    def update_page_size(self, page_size: int):
        self.page_size = max(1, page_size)
        self._clamp()

    def is_visible(self, row: int) -> bool:
        return self.offset <= row < self.offset + self.page_size

    def scroll_to(self, target: int) -> bool:
        """Move to ``target`` (clamped); return True if the offset changed."""
        before = self.offset
        self.offset = target
        self._clamp()
        return self.offset != before

    def scroll(self, direction: Dir) -> bool:
        half_page = self.page_size // 2
        if direction.kind == UP:
            return self.scroll_to(self.offset - direction.count)
        if direction.kind == DOWN:
            return self.scroll_to(self.offset + direction.count)
        if direction.kind == HALF_PAGE_UP:
            return self.scroll_to(self.offset - half_page)
        if direction.kind == HALF_PAGE_DOWN:
            return self.scroll_to(self.offset + half_page)
        if direction.kind == TOP:
            return self.scroll_to(0)
        if direction.kind == BOTTOM:
            return self.scroll_to(self.total_rows)
        raise ValueError(f"unknown scroll direction: {direction.kind}")
