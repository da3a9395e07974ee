"""Output helpers for the pda CLI."""

from pda.cli.output.layout import (
    ColumnKind,
    ContentWidths,
    WidthPlan,
    apply_column_constraints,
    plan_widths,
    select_columns,
)
from pda.cli.output.table import (
    DEFAULT_STYLE,
    TABLE_STYLES,
    ListFormat,
    TableStyle,
    TableWriter,
    WrapPolicy,
    get_style,
)
from pda.cli.output.terminal import DEFAULT_TERMINAL_WIDTH, detect_terminal_width

__all__ = [
    "DEFAULT_STYLE",
    "DEFAULT_TERMINAL_WIDTH",
    "TABLE_STYLES",
    "ColumnKind",
    "ContentWidths",
    "ListFormat",
    "TableStyle",
    "TableWriter",
    "WidthPlan",
    "WrapPolicy",
    "apply_column_constraints",
    "detect_terminal_width",
    "get_style",
    "plan_widths",
    "select_columns",
]
