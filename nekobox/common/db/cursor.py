"""
Cursor pagination.

A cursor carries the last-seen entity ID of the previous page and the page
size. Results are ordered newest first, so the next page holds the rows
whose ID is strictly lower than the cursor value.
"""

from dataclasses import dataclass
from typing import Any, Optional

from nekobox.config import settings

DEFAULT_PAGE_SIZE = settings.QUESTION_PAGE_SIZE


@dataclass
class Cursor:
    """
    Attributes:
        value: Last-seen ID, or None for the first page
        page_size: Requested page size; non-positive values fall back to the default
    """
    value: Optional[Any] = None
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def limit(self) -> int:
        if self.page_size <= 0:
            return DEFAULT_PAGE_SIZE
        return self.page_size

    @property
    def has_value(self) -> bool:
        """True when the cursor points past a previous page."""
        return self.value is not None and str(self.value) != ""

    @property
    def last_id(self) -> Optional[int]:
        """
        The cursor value as an integer ID, or None when the cursor is empty.

        Raises:
            ValueError: If the value is not a whole-number ID
        """
        if not self.has_value:
            return None
        if isinstance(self.value, bool):
            raise ValueError(f"invalid cursor value: {self.value!r}")
        if isinstance(self.value, int):
            return self.value
        if isinstance(self.value, float):
            if not self.value.is_integer():
                raise ValueError(f"invalid cursor value: {self.value!r}")
            return int(self.value)
        # Strings and decimals go through str so "8.5" is rejected, not truncated.
        return int(str(self.value))
