"""Pagination controls: page stepping and the go-to-page dialog"""

from typing import Optional

from dnsboard.table.engine import DataTable


def parse_page_input(text: Optional[str]) -> Optional[int]:
    """1-based page number typed by a user, or None if it is not a number"""
    if text is None:
        return None
    text = text.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None


class PaginationControls:
    """Previous/next buttons plus a dialog for jumping to a page"""

    def __init__(self, table: DataTable):
        self.table = table
        self.is_dialog_open = False
        self.page_input = ""

    @property
    def title(self) -> str:
        return f"Currently on page {self.table.page_index + 1}"

    @property
    def location_text(self) -> str:
        return self.table.location_text

    def open_dialog(self) -> None:
        self.page_input = ""
        self.is_dialog_open = True

    def close_dialog(self) -> None:
        self.is_dialog_open = False

    def submit(self, text: Optional[str] = None) -> bool:
        """
        Jump to the typed page and close the dialog.

        Input is 1-based and clamped to the existing pages. Anything that is
        not a number only closes the dialog. Returns whether a jump happened.
        """
        if text is None:
            text = self.page_input
        page = parse_page_input(text)
        if page is not None:
            self.table.set_page_index(page - 1)
        self.close_dialog()
        return page is not None

    def first(self) -> None:
        self.table.first_page()
        self.close_dialog()

    def last(self) -> None:
        self.table.last_page()
        self.close_dialog()

    def previous(self) -> None:
        self.table.previous_page()

    def next(self) -> None:
        self.table.next_page()
