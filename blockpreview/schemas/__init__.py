from blockpreview.schemas.schemas import (
    BlockData,
    VisibilitySettings, VisibilityResponse,
    BlockPreviewVariables, ServerVariablesResponse,
)

__all__ = [
    "BlockData",
    "VisibilitySettings", "VisibilityResponse",
    "BlockPreviewVariables", "ServerVariablesResponse",
]
