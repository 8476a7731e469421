# src/remediator/dom/core.py
from typing import Callable, Optional

from .cursor import TagCursor

# A tag hook runs during the single tag traversal: (cursor, tag_name) -> None
TagHook = Callable[[TagCursor, str], None]

# A content rule receives the full document and returns the (new) document.
ContentRule = Callable[[str], str]

ACCESSIBLE_NAME_ATTRIBUTES = ("aria-label", "aria-labelledby", "title")


def has_accessible_name(cursor: TagCursor) -> bool:
    """
    True when the current tag already carries an accessible name.
    aria-labelledby is not resolved against the referenced ids.
    """
    return any(cursor.get_attribute(name) is not None for name in ACCESSIBLE_NAME_ATTRIBUTES)


class TagRuleDefinition:
    """
    Configuration object binding a tag-level fix to the condition it applies to.

    Built-in definitions live in the 'remediator.dom.elements' package, one
    module per rule, each exposing a module level DEFINITION.
    """

    def __init__(
            self,
            name: str,
            applies: Callable[[TagCursor, str], bool],
            fix: Callable[[TagCursor], None],
            order: int = 100,
            tag_name: Optional[str] = None
    ):
        self.name = name
        self.applies = applies
        self.fix = fix
        self.order = order
        # When set, only tags with this name are offered to applies().
        self.tag_name = tag_name.lower() if tag_name else None

    def __repr__(self) -> str:
        return f"TagRuleDefinition(name={self.name!r}, order={self.order}, tag_name={self.tag_name!r})"
