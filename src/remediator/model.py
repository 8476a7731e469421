# src/remediator/model.py
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

DEFAULT_EMPTY_BLOCKS = [
    "core/heading",
    "core/post-title",
    "core/button",
    "core/navigation-link",
]

DEFAULT_EDITOR_BLOCKS = [
    # Interactive Elements
    "core/button",
    "core/file",
    "core/search",
    "core/social-link",

    # Media
    "core/image",
    "core/video",
    "core/cover",
    "core/gallery",

    # Layout & Grouping
    "core/group",
    "core/columns",
    "core/column",
]


class BlockContext(BaseModel):
    """A rendered content block as handed over by the host: its type name and attributes."""
    name: Optional[str] = None
    attrs: Dict[str, Any] = Field(default_factory=dict)


class EditorSettings(BaseModel):
    """Which block types expose manual aria controls in the host's editor."""
    move_to_advanced: bool = True
    allowed_blocks: List[str] = Field(default_factory=lambda: list(DEFAULT_EDITOR_BLOCKS))


class LoggingSettings(BaseModel):
    level: str = "WARNING"
    module_levels: Dict[str, str] = Field(default_factory=dict)
    silenced: Dict[str, str] = Field(default_factory=dict)


class RemediationSettings(BaseModel):
    """
    Typed view of the 'remediation' section of settings.json.

    Passed explicitly to the pipeline and block filters so that no engine
    component reads global configuration on its own.
    """
    document_marker: str = "<html"
    empty_blocks: List[str] = Field(default_factory=lambda: list(DEFAULT_EMPTY_BLOCKS))
    native_aria_label_blocks: List[str] = Field(default_factory=list)
    plugins: List[str] = Field(default_factory=list)
    editor: EditorSettings = Field(default_factory=EditorSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
