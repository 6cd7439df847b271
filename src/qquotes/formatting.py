import shutil
from typing import List, Mapping, Tuple

from rich import box
from rich.cells import cell_len
from rich.table import Table
from rich.text import Text

from .repository import Quote

DEFAULT_TERM_WIDTH = 80

# Columns lost to padding/separators in each display mode.
SHORT_RESERVED = 5
LONG_RESERVED = 8


def terminal_width() -> int:
    return shutil.get_terminal_size((DEFAULT_TERM_WIDTH, 24)).columns or DEFAULT_TERM_WIDTH


def column_widths(quotes: Mapping[str, Quote], long_format: bool) -> Tuple[int, int]:
    """Return (id_max_width, author_max_width) in terminal cells; ids count as 0 in short mode."""
    id_max = max((cell_len(i) for i in quotes), default=0) if long_format else 0
    author_max = max((cell_len(q.author) for q in quotes.values()), default=0)
    return id_max, author_max


def wrap_width(term_width: int, id_max_width: int, author_max_width: int, long_format: bool) -> int:
    if long_format:
        width = term_width - id_max_width - author_max_width - LONG_RESERVED
    else:
        width = term_width - author_max_width - SHORT_RESERVED
    return max(1, width)


def _fold(word: str, width: int) -> List[str]:
    pieces: List[str] = []
    current, used = "", 0
    for ch in word:
        size = cell_len(ch)
        if current and used + size > width:
            pieces.append(current)
            current, used = "", 0
        current += ch
        used += size
    if current:
        pieces.append(current)
    return pieces


def wrap_cells(text: str, width: int) -> str:
    """
    Fill text to lines of at most `width` terminal cells.

    Runs of whitespace collapse to one space. Words wider than the line
    are broken between characters; a single double-width character on a
    1-cell line still gets a line of its own.
    """
    lines: List[str] = []
    line, used = "", 0
    for word in text.split():
        pieces = _fold(word, width) if cell_len(word) > width else [word]
        for piece in pieces:
            size = cell_len(piece)
            if line and used + 1 + size > width:
                lines.append(line)
                line, used = "", 0
            if line:
                line += " "
                used += 1
            line += piece
            used += size
    if line:
        lines.append(line)
    return "\n".join(lines)


def build_rows(quotes: Mapping[str, Quote], long_format: bool, term_width: int) -> List[Tuple[str, ...]]:
    id_max, author_max = column_widths(quotes, long_format)
    width = wrap_width(term_width, id_max, author_max, long_format)
    rows: List[Tuple[str, ...]] = []
    for quote_id in sorted(quotes):
        q = quotes[quote_id]
        text = wrap_cells(q.quote, width)
        rows.append((quote_id, q.author, text) if long_format else (q.author, text))
    return rows


def quotes_table(quotes: Mapping[str, Quote], long_format: bool = False, term_width: int | None = None) -> Table:
    """
    Lay quotes out as a table without an outer border:

        Author | Quote
        -------+------
        Twain  | Lies, damned lies, and statistics.

    Long format adds a leading QUOTE_ID column. Quote text is pre-wrapped
    so the table fits in term_width columns.
    """
    if term_width is None:
        term_width = terminal_width()
    titles = ["QUOTE_ID", "Author", "Quote"] if long_format else ["Author", "Quote"]

    table = Table(box=box.ASCII, show_edge=False, header_style="bold", pad_edge=False)
    for title in titles:
        table.add_column(title, overflow="fold")
    for row in build_rows(quotes, long_format, term_width):
        table.add_row(*(Text(cell) for cell in row))
    return table
