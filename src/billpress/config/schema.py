"""Typed configuration schema and loader for the billpress package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, confloat, conint, field_validator

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

Points = confloat(gt=0.0)


class PageSettings(BaseModel):
    """Target sheet and outer margin (points)."""

    size: Literal["A4"]
    margin: Points

    model_config = ConfigDict(extra="forbid")


class FontSettings(BaseModel):
    """Standard PDF font names used for body and emphasis."""

    regular: str
    bold: str

    model_config = ConfigDict(extra="forbid")


class ColorSettings(BaseModel):
    """Hex colours for the document theme."""

    primary: str
    text: str
    muted: str
    table_head_fill: str
    table_grid: str

    model_config = ConfigDict(extra="forbid")

    @field_validator("*")
    @classmethod
    def _hex_colour(cls, value: str) -> str:
        body = value.lstrip("#")
        if len(body) != 6 or any(ch not in "0123456789abcdefABCDEF" for ch in body):
            raise ValueError(f"expected #RRGGBB colour, got {value!r}")
        return "#" + body.upper()


class SpacingSettings(BaseModel):
    """Vertical rhythm of the layout."""

    body_size: Points
    heading_size: Points
    line_height: Points
    detail_row: Points
    summary_row: Points
    terms_line: Points
    section_gap: Points
    heading_gap: Points
    block_gap: confloat(ge=0.0)
    continuation_offset: Points
    table_heading_reserve: Points

    model_config = ConfigDict(extra="forbid")


class HeaderSettings(BaseModel):
    """First-page and continuation header geometry."""

    title_size: Points
    continuation_size: Points
    logo_width: Points
    logo_height: Points
    logo_offset: confloat(ge=0.0)
    logo_gap: confloat(ge=0.0)
    details_gap: confloat(ge=0.0)

    model_config = ConfigDict(extra="forbid")


class TableSettings(BaseModel):
    """Item table styling; ``None`` in ``column_widths`` means auto width."""

    font_size: Points
    cell_padding: confloat(ge=0.0)
    min_row_height: Points
    column_widths: list[Points | None]

    model_config = ConfigDict(extra="forbid")

    @field_validator("column_widths")
    @classmethod
    def _five_columns(cls, value: list[float | None]) -> list[float | None]:
        if len(value) != 5:
            raise ValueError("column_widths must list exactly five columns")
        if sum(1 for w in value if w is None) > 1:
            raise ValueError("at most one column may use auto width")
        return value


class SignatureSettings(BaseModel):
    """Signature image size and the constant block height."""

    width: Points
    image_height: Points
    block_height: Points
    caption_size: Points

    model_config = ConfigDict(extra="forbid")


class TotalsSettings(BaseModel):
    """Totals summary geometry."""

    rule_gap_above: confloat(ge=0.0)
    rule_gap_below: confloat(ge=0.0)
    grand_total_size: Points
    words_size: Points

    model_config = ConfigDict(extra="forbid")


class FooterSettings(BaseModel):
    """Combined footer block geometry."""

    closing_note_width_ratio: confloat(gt=0.0, le=1.0)
    block_padding: confloat(ge=0.0)
    transaction_offset: confloat(ge=0.0)
    transaction_block_height: Points
    terms_size: Points
    payment_heading_size: Points

    model_config = ConfigDict(extra="forbid")


class CurrencySettings(BaseModel):
    """Currency symbol and amount-in-words framing."""

    symbol: str
    symbol_env: str
    words_prefix: str
    words_suffix: str

    model_config = ConfigDict(extra="forbid")


class LabelSettings(BaseModel):
    """Jurisdiction-specific labels."""

    tax: str
    tax_id: str

    model_config = ConfigDict(extra="forbid")


class OutputSettings(BaseModel):
    """PDF writer options."""

    compress: bool
    author: str

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    page: PageSettings
    fonts: FontSettings
    colors: ColorSettings
    spacing: SpacingSettings
    header: HeaderSettings
    table: TableSettings
    signature: SignatureSettings
    totals: TotalsSettings
    footer: FooterSettings
    currency: CurrencySettings
    labels: LabelSettings
    output: OutputSettings

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    environment variable named by ``currency.symbol_env``.
    """

    with (
        importlib_resources.files("billpress.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    cfg = ConfigModel.model_validate(merged)

    environ = env if env is not None else os.environ
    symbol_env = cfg.currency.symbol_env
    if symbol_env in environ:
        cfg.currency.symbol = environ[symbol_env]

    return cfg


__all__ = [
    "ConfigModel",
    "PageSettings",
    "FontSettings",
    "ColorSettings",
    "SpacingSettings",
    "HeaderSettings",
    "TableSettings",
    "SignatureSettings",
    "TotalsSettings",
    "FooterSettings",
    "CurrencySettings",
    "LabelSettings",
    "OutputSettings",
    "deep_merge_dicts",
    "load_config",
]
