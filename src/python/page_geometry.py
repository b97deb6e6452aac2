"""
PageGeometry: page count, page width and horizontal scroll offset of the pager.
"""

from custom_types import PageSlot


class PageGeometry:
    """Track the pager viewport over a row of equally wide pages."""

    def __init__(self, page_count: int = 0, page_width: int = 0, offset_x: int = 0):
        self.page_count = int(page_count)
        self.page_width = int(page_width)
        self.page_height = 0
        self.offset_x = int(offset_x)

    @property
    def content_width(self) -> int:
        """Right edge of the last page in content coordinates."""
        return self.page_count * self.page_width

    @property
    def max_offset(self) -> int:
        """Largest offset that still shows a whole page."""
        return max(0, (self.page_count - 1) * self.page_width)

    def clamp(self, page: int) -> int:
        """Clamp a page index into [0, page_count - 1] (0 when empty)."""
        return max(0, min(int(page), self.page_count - 1))

    def page_offset(self, page: int) -> int:
        """Offset at which `page` fills the viewport."""
        return int(page) * self.page_width

    def set_page_count(self, page_count: int) -> None:
        self.page_count = max(0, int(page_count))

    def set_page_size(self, width: int, height: int) -> None:
        """Update page size after a measure pass."""
        self.page_width = int(width)
        self.page_height = int(height)

    def scroll_to(self, x: float) -> None:
        """Move the viewport to an absolute offset."""
        self.offset_x = int(round(x))

    def scroll_by_clamped(self, delta: int) -> int:
        """Follow a drag by `delta` pixels without leaving the content.

        Dragging toward the start stops at offset 0; dragging toward the end
        stops once the last page's right edge meets the viewport's right edge.
        Returns the distance actually scrolled.
        """
        delta = int(delta)
        applied = 0
        if delta < 0:
            if self.offset_x > 0:
                applied = max(-self.offset_x, delta)
        elif delta > 0:
            headroom = self.content_width - self.offset_x - self.page_width
            if headroom > 0:
                applied = min(headroom, delta)
        self.offset_x += applied
        return applied

    def slots(self) -> list[PageSlot]:
        """Slot of every page in a single row, indexed by page order."""
        return [
            (i * self.page_width, 0, (i + 1) * self.page_width, self.page_height)
            for i in range(self.page_count)
        ]

    def is_aligned(self, page: int) -> bool:
        return self.offset_x == self.page_offset(page)
