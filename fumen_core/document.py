from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, List

from .page import Page
from .transition import next_page


@dataclass
class Fumen:
    """An ordered list of pages. `guideline` is stored once, on the first page's header."""
    pages: List[Page] = field(default_factory=list)
    guideline: bool = True

    def add_page(self, **changes: Any) -> Page:
        """Appends the page that follows the last one (or a blank page) with `changes` applied."""
        base = next_page(self.pages[-1]) if self.pages else Page()
        page = replace(base, **changes) if changes else base
        self.pages.append(page)
        return page
