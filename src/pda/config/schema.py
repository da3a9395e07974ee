"""Pydantic models for the pda configuration file."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pda.errors import InvalidFormatError


class ListDefaults(BaseModel):
    """Defaults applied to ``pda list`` when a flag is not given."""

    model_config = ConfigDict(extra="forbid")

    format: str = Field(default="table", description="table, csv, html or markdown")
    style: str = Field(default="rounded", description="Table style name")
    ttl: bool = Field(default=False, description="Show the TTL column")
    header: bool = Field(default=True, description="Emit the header row")

    @field_validator("format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        from pda.cli.output.table import ListFormat

        try:
            return ListFormat.parse(value).value
        except InvalidFormatError as e:
            raise ValueError(e.message) from None

    @field_validator("style")
    @classmethod
    def _known_style(cls, value: str) -> str:
        from pda.cli.output.table import TABLE_STYLES

        if value not in TABLE_STYLES:
            raise ValueError(f"unknown style {value!r}, expected one of {sorted(TABLE_STYLES)}")
        return value


class PdaConfig(BaseModel):
    """Root configuration model.

    Attributes:
        store_dir: Directory holding one sub-directory per database.
        default_db: Database used when a reference omits ``@DB``.
        list: Defaults for the list command.
    """

    model_config = ConfigDict(extra="forbid")

    store_dir: Path | None = None
    default_db: str = Field(default="default", min_length=1)
    list: ListDefaults = Field(default_factory=ListDefaults)

    @field_validator("default_db")
    @classmethod
    def _normalize_db(cls, value: str) -> str:
        value = value.strip().lstrip("@").lower()
        if not value:
            raise ValueError("default_db must not be blank")
        return value

    @field_validator("store_dir")
    @classmethod
    def _expand_store_dir(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None
