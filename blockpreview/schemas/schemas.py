#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 schemas for request validation and response serialisation.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Block data
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_ALIAS_KEYS = ("contentTypeAlias", "content_type_alias", "alias")
_UDI_KEYS   = ("udi", "key", "id")
_VALUE_KEYS = ("values", "properties")


class BlockData(BaseModel):
    """
    Raw block payload as posted by the block list editor.

    Property values may arrive nested under ``values`` / ``properties`` or as
    extra top-level keys next to the alias and identifier; both are folded
    into ``values``.
    """
    model_config = ConfigDict(frozen=True)

    content_type_alias: str = Field(..., min_length=1, max_length=255)
    udi:                str = Field(default="", max_length=255)
    values:             dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_values(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        alias = next((data[k] for k in _ALIAS_KEYS if k in data), None)
        udi   = next((data[k] for k in _UDI_KEYS if k in data), "")

        values: dict[str, Any] = {}
        for k in _VALUE_KEYS:
            nested = data.get(k)
            if isinstance(nested, dict):
                values.update(nested)
        for k, v in data.items():
            if k in _ALIAS_KEYS or k in _UDI_KEYS or k in _VALUE_KEYS:
                continue
            values[k] = v

        return {
            "content_type_alias": alias,
            "udi": "" if udi is None else str(udi),
            "values": values,
        }

    @field_validator("content_type_alias")
    @classmethod
    def alias_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("contentTypeAlias must not be blank")
        return v


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Visibility indicator
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class VisibilitySettings(BaseModel):
    """Block settings that control whether the block is shown on the site."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    hide_block: Any           = Field(default=None, alias="hideBlock")
    start_date: Optional[str] = Field(default="", alias="startDate")
    end_date:   Optional[str] = Field(default="", alias="endDate")


class VisibilityResponse(BaseModel):
    opacity: float


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Client configuration
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class BlockPreviewVariables(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    preview_api:      str   = Field(..., alias="previewApi")
    visibility_api:   str   = Field(..., alias="visibilityApi")
    debounce_seconds: float = Field(..., alias="debounceSeconds")


class ServerVariablesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    block_preview: BlockPreviewVariables = Field(..., alias="blockPreview")
