import re

from ..core import TagRuleDefinition
from ..cursor import TagCursor

DECORATIVE_CLASS_PATTERN = re.compile(r'decorative|bg-|background|spacer')
DECORATIVE_ROLES = ("presentation", "none")


def is_missing_alt(cursor: TagCursor, tag_name: str) -> bool:
    return tag_name == "img" and cursor.get_attribute("alt") is None


def is_decorative(cursor: TagCursor) -> bool:
    """An image is decorative by role or by a background/spacer style class."""
    if cursor.get_attribute("role") in DECORATIVE_ROLES:
        return True
    classes = (cursor.get_attribute("class") or "").lower()
    return bool(DECORATIVE_CLASS_PATTERN.search(classes))


def fix_alt(cursor: TagCursor) -> None:
    """Always leaves an alt attribute: the title for informative images, else empty."""
    title = cursor.get_attribute("title")
    cursor.set_attribute("alt", title if title and not is_decorative(cursor) else "")


# --- DEFINITION ---
DEFINITION = TagRuleDefinition(
    name="image",
    applies=is_missing_alt,
    fix=fix_alt,
    order=20,
    tag_name="img"
)
