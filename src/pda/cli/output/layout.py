"""Column width planning for fixed-width table output.

The plan divides the terminal width among the selected columns in three
steps: subtract what the table style draws around the cells, split the
rest by per-column weights, then shrink columns to the widest content they
hold and hand the freed space to columns that can still use it.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from rich.cells import cell_len
from rich.text import Text

from pda.cli.output.table import TableStyle, TableWriter, WrapPolicy
from pda.cli.output.terminal import DEFAULT_TERMINAL_WIDTH, detect_terminal_width
from pda.errors import NoColumnsSelectedError
from pda.log import get_logger

logger = get_logger(__name__)

MIN_COLUMN_WIDTH = 10


class ColumnKind(Enum):
    """A column of the list table."""

    KEY = "Key"
    VALUE = "Value"
    TTL = "TTL"

    @property
    def label(self) -> str:
        return self.value


_BASE_WEIGHTS = {ColumnKind.KEY: 0.25, ColumnKind.TTL: 0.25}


def select_columns(key: bool, value: bool, ttl: bool) -> list[ColumnKind]:
    """Build the column set in its fixed Key, Value, TTL order.

    Raises:
        NoColumnsSelectedError: If every column is disabled.
    """
    selected = ((ColumnKind.KEY, key), (ColumnKind.VALUE, value), (ColumnKind.TTL, ttl))
    columns = [kind for kind, enabled in selected if enabled]
    if not columns:
        raise NoColumnsSelectedError()
    return columns


def visual_width(text: str) -> int:
    """Terminal cell width of ``text`` ignoring ANSI escape sequences."""
    return Text.from_ansi(text).cell_len


def longest_line_width(text: str) -> int:
    """Cell width of the widest line in ``text``."""
    plain = Text.from_ansi(text).plain
    return max((cell_len(line) for line in plain.split("\n")), default=0)


class ContentWidths:
    """Widest rendered cell seen so far, per column."""

    def __init__(self, size: int) -> None:
        self._widths = [0] * size

    def observe(self, cells: Sequence[str]) -> None:
        """Record a header or row. Extra cells beyond the column count are ignored."""
        for idx in range(min(len(cells), len(self._widths))):
            width = longest_line_width(cells[idx])
            if width > self._widths[idx]:
                self._widths[idx] = width

    def __getitem__(self, idx: int) -> int:
        return self._widths[idx]

    def __len__(self) -> int:
        return len(self._widths)

    def __iter__(self) -> Iterator[int]:
        return iter(self._widths)

    def as_list(self) -> list[int]:
        return list(self._widths)


def max_separator_width(style: TableStyle) -> int:
    return max((visual_width(glyph) for glyph in style.separator_glyphs()), default=0)


def row_overhead(style: TableStyle, column_count: int) -> int:
    """Characters per row taken by padding, separators and borders."""
    if column_count == 0:
        return 0
    overhead = visual_width(style.padding_left + style.padding_right) * column_count
    if style.separate_columns and column_count > 1:
        # Worst case: the widest glyph any row boundary might use.
        overhead += (column_count - 1) * max_separator_width(style)
    if style.draw_border:
        left, right = style.border_glyphs()
        overhead += visual_width(left + right)
    return overhead


def content_width_for_style(total_width: int, style: TableStyle | None, column_count: int) -> int:
    """Width left for cell text once the style's furniture is drawn."""
    if column_count == 0:
        return total_width
    if style is not None:
        total_width -= row_overhead(style, column_count)
    return max(total_width, column_count)


def base_weight(kind: Any, has_ttl: bool) -> float:
    if kind is ColumnKind.VALUE:
        return 0.5 if has_ttl else 0.75
    return _BASE_WEIGHTS.get(kind, 0.25)


def distribute_widths(total: int, columns: Sequence[Any]) -> list[int]:
    """Split ``total`` among ``columns`` by weight.

    Every column gets at least ``MIN_COLUMN_WIDTH`` when the budget allows
    it, otherwise an equal share of the budget. The result sums to
    ``total`` whenever ``total >= len(columns)``.
    """
    if not columns:
        return []
    if total <= 0:
        total = DEFAULT_TERMINAL_WIDTH

    has_ttl = ColumnKind.TTL in columns
    weights = [base_weight(c, has_ttl) for c in columns]
    weight_sum = sum(weights) or 1
    floor = max(1, min(MIN_COLUMN_WIDTH, total // len(columns)))

    widths = [max(int(w / weight_sum * total), floor) for w in weights]

    excess = sum(widths) - total
    while excess > 0:
        progressed = False
        for idx, width in enumerate(widths):
            if width > floor:
                widths[idx] -= 1
                excess -= 1
                progressed = True
                if excess == 0:
                    break
        if not progressed:
            break

    remaining = total - sum(widths)
    for i in range(max(remaining, 0)):
        widths[i % len(widths)] += 1
    return widths


def cap_widths(widths: Sequence[int], caps: Sequence[int], content_width: int) -> list[int]:
    """Clamp columns to their content and hand back the freed space.

    A cap of 0 means nothing was observed and the column is unbounded.
    Leftover space goes one character at a time, left to right, to columns
    still below their cap. When every column is at its cap the leftover is
    left unused.
    """

    def cap_of(idx: int) -> int:
        return caps[idx] if idx < len(caps) else 0

    capped: list[int] = []
    for idx, width in enumerate(widths):
        width = max(width, 1)
        cap = cap_of(idx)
        if cap > 0 and width > cap:
            width = cap
        capped.append(width)

    remaining = content_width - sum(capped)
    while remaining > 0:
        progressed = False
        for idx in range(len(capped)):
            cap = cap_of(idx)
            if cap > 0 and capped[idx] >= cap:
                continue
            capped[idx] += 1
            remaining -= 1
            progressed = True
            if remaining == 0:
                break
        if not progressed:
            break
    return capped


@dataclass(frozen=True)
class WidthPlan:
    """Final column widths for one render.

    Attributes:
        widths: Content width per column, in column order.
        content_width: Budget the widths were planned against.
        total_width: Maximum total row width, furniture included.
    """

    widths: tuple[int, ...]
    content_width: int
    total_width: int


def plan_widths(
    total_width: int,
    style: TableStyle | None,
    columns: Sequence[Any],
    caps: Sequence[int] | ContentWidths = (),
) -> WidthPlan:
    """Compute the width plan for a table of ``columns`` in ``total_width``."""
    if total_width <= 0:
        total_width = DEFAULT_TERMINAL_WIDTH
    content_width = content_width_for_style(total_width, style, len(columns))
    widths = distribute_widths(content_width, columns)
    widths = cap_widths(widths, list(caps), content_width)
    return WidthPlan(widths=tuple(widths), content_width=content_width, total_width=total_width)


def apply_column_constraints(
    writer: TableWriter,
    columns: Sequence[Any],
    caps: Sequence[int] | ContentWidths = (),
    *,
    out: Any = None,
    total_width: int | None = None,
) -> WidthPlan:
    """Plan column widths and configure ``writer`` with them.

    Args:
        writer: Table to configure; its style determines the overhead.
        columns: Column kinds in display order.
        caps: Widest observed content per column.
        out: Output sink used to probe the terminal width.
        total_width: Explicit width, skipping the terminal probe.

    Returns:
        The plan that was applied.
    """
    if total_width is None:
        total_width = detect_terminal_width(out if out is not None else writer.out)
    plan = plan_widths(total_width, writer.style, columns, caps)
    for idx, width in enumerate(plan.widths):
        writer.set_column_width(idx, width)
        writer.set_wrap_policy(idx, WrapPolicy.SOFT)
    writer.set_max_total_row_width(plan.total_width)
    logger.debug(
        "planned column widths",
        total_width=plan.total_width,
        content_width=plan.content_width,
        widths=list(plan.widths),
    )
    return plan
