"""Table rendering for CLI output.

``TableWriter`` buffers a header and rows, accepts per-column width and wrap
settings, and renders once in one of the supported formats. Only the
``TABLE`` format honours the width settings; CSV, HTML and Markdown are
written unconstrained.
"""

from __future__ import annotations

import csv
import html
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from rich import box
from rich.box import Box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from pda.errors import InvalidFormatError


class ListFormat(Enum):
    """Output format for list command."""

    TABLE = "table"
    CSV = "csv"
    HTML = "html"
    MARKDOWN = "markdown"

    @classmethod
    def parse(cls, value: str) -> ListFormat:
        """Resolve a format name, accepting ``auto``, ``tabular`` and ``md``."""
        name = _FORMAT_ALIASES.get(value.strip().lower(), value.strip().lower())
        try:
            return cls(name)
        except ValueError:
            raise InvalidFormatError(
                f'unsupported format "{value}", use table, csv, html or markdown'
            ) from None

    @property
    def is_tabular(self) -> bool:
        """Whether this format is fixed-width and needs column planning."""
        return self is ListFormat.TABLE


_FORMAT_ALIASES = {"auto": "table", "tabular": "table", "md": "markdown"}


class WrapPolicy(Enum):
    """How a column handles text wider than its assigned width."""

    NONE = "none"
    SOFT = "soft"


@dataclass(frozen=True)
class TableStyle:
    """Rendering furniture of a table.

    Attributes:
        name: Style name used on the command line.
        box: Glyph set for separators and borders, or None for no lines.
        padding_left: Text placed before each cell.
        padding_right: Text placed after each cell.
        separate_columns: Whether a separator glyph is drawn between columns.
        draw_border: Whether the outer left and right border is drawn.
    """

    name: str
    box: Box | None
    padding_left: str = " "
    padding_right: str = " "
    separate_columns: bool = True
    draw_border: bool = True

    def separator_glyphs(self) -> list[str]:
        """Every glyph that can appear between two columns."""
        if self.box is None:
            return []
        b = self.box
        return [
            b.head_vertical,
            b.mid_vertical,
            b.foot_vertical,
            b.top_divider,
            b.bottom_divider,
            b.head_row_cross,
            b.row_cross,
            b.foot_row_cross,
        ]

    def border_glyphs(self) -> tuple[str, str]:
        if self.box is None:
            return "", ""
        return self.box.mid_left, self.box.mid_right


TABLE_STYLES: dict[str, TableStyle] = {
    "rounded": TableStyle("rounded", box.ROUNDED),
    "square": TableStyle("square", box.SQUARE),
    "ascii": TableStyle("ascii", box.ASCII),
    "simple": TableStyle("simple", box.SIMPLE_HEAD, draw_border=False),
    "plain": TableStyle("plain", None, separate_columns=False, draw_border=False),
}
DEFAULT_STYLE = TABLE_STYLES["rounded"]


def get_style(name: str) -> TableStyle:
    try:
        return TABLE_STYLES[name]
    except KeyError:
        raise InvalidFormatError(
            f'unknown style "{name}", use one of {", ".join(sorted(TABLE_STYLES))}'
        ) from None


class TableWriter:
    """Buffered table with deferred rendering."""

    def __init__(self, out: TextIO | None = None, style: TableStyle = DEFAULT_STYLE) -> None:
        self._out = out
        self.style = style
        self.header: list[str] = []
        self.rows: list[list[str]] = []
        self.column_widths: dict[int, int] = {}
        self.wrap_policies: dict[int, WrapPolicy] = {}
        self.max_total_row_width: int | None = None

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def column_count(self) -> int:
        return max([len(self.header), *(len(r) for r in self.rows)])

    def append_header(self, cells: Sequence[str]) -> None:
        self.header = list(cells)

    def append_row(self, cells: Sequence[str]) -> None:
        self.rows.append(list(cells))

    def set_column_width(self, index: int, width: int) -> None:
        self.column_widths[index] = max(1, width)

    def set_wrap_policy(self, index: int, policy: WrapPolicy) -> None:
        self.wrap_policies[index] = policy

    def set_max_total_row_width(self, width: int) -> None:
        self.max_total_row_width = width

    def render(self, fmt: ListFormat) -> None:
        """Write the buffered table in ``fmt``."""
        if fmt is ListFormat.TABLE:
            self.render_table()
        elif fmt is ListFormat.CSV:
            self.render_csv()
        elif fmt is ListFormat.HTML:
            self.render_html()
        elif fmt is ListFormat.MARKDOWN:
            self.render_markdown()

    def build_table(self) -> Table:
        """Build the rich table with the configured widths applied."""
        style = self.style
        pad_left = Text.from_ansi(style.padding_left).cell_len
        pad_right = Text.from_ansi(style.padding_right).cell_len
        table = Table(
            box=style.box,
            show_header=bool(self.header),
            show_edge=style.draw_border,
            padding=(0, pad_right, 0, pad_left),
            header_style="bold",
        )
        for idx in range(self.column_count):
            label = self.header[idx] if idx < len(self.header) else ""
            soft = self.wrap_policies.get(idx, WrapPolicy.NONE) is WrapPolicy.SOFT
            table.add_column(
                Text(label),
                max_width=self.column_widths.get(idx),
                overflow="fold" if soft else "ellipsis",
                no_wrap=not soft,
            )
        for row in self.rows:
            table.add_row(*(Text(cell) for cell in row))
        return table

    def render_table(self) -> None:
        console = Console(
            file=self.out,
            width=self.max_total_row_width,
            highlight=False,
            soft_wrap=False,
        )
        console.print(self.build_table())

    def render_csv(self) -> None:
        writer = csv.writer(self.out, lineterminator="\n")
        if self.header:
            writer.writerow(self.header)
        writer.writerows(self.rows)

    def render_html(self) -> None:
        out = self.out
        out.write('<table class="pda-table">\n')
        if self.header:
            out.write("  <thead>\n  <tr>\n")
            for cell in self.header:
                out.write(f"    <th>{_html_cell(cell)}</th>\n")
            out.write("  </tr>\n  </thead>\n")
        out.write("  <tbody>\n")
        for row in self.rows:
            out.write("  <tr>\n")
            for cell in row:
                out.write(f"    <td>{_html_cell(cell)}</td>\n")
            out.write("  </tr>\n")
        out.write("  </tbody>\n</table>\n")

    def render_markdown(self) -> None:
        out = self.out
        if self.header:
            out.write(_markdown_row(self.header))
            out.write("| " + " | ".join("---" for _ in self.header) + " |\n")
        for row in self.rows:
            out.write(_markdown_row(row))


def _html_cell(text: str) -> str:
    return html.escape(text).replace("\n", "<br/>")


def _markdown_row(cells: Sequence[str]) -> str:
    escaped = [c.replace("|", "\\|").replace("\n", "<br/>") for c in cells]
    return "| " + " | ".join(escaped) + " |\n"
