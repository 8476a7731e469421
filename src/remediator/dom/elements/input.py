from ..core import TagRuleDefinition
from ..cursor import TagCursor
from remediator.services.label_service import derive_input_label
from remediator.utils.label_tables import SKIPPED_INPUT_TYPES


def _input_type(cursor: TagCursor) -> str:
    return (cursor.get_attribute("type") or "text").lower()


def is_unlabeled_input(cursor: TagCursor, tag_name: str) -> bool:
    """
    Inputs without aria-label/aria-labelledby/id. An id is taken as a sign of
    an external <label for>; whether that label exists is not checked.
    """
    if tag_name != "input" or _input_type(cursor) in SKIPPED_INPUT_TYPES:
        return False
    return (
        cursor.get_attribute("aria-label") is None
        and cursor.get_attribute("aria-labelledby") is None
        and cursor.get_attribute("id") is None
    )


def label_input(cursor: TagCursor) -> None:
    label = derive_input_label(
        _input_type(cursor),
        placeholder=cursor.get_attribute("placeholder"),
        name=cursor.get_attribute("name"),
    )
    cursor.set_attribute("aria-label", label)


# --- DEFINITION ---
DEFINITION = TagRuleDefinition(
    name="input",
    applies=is_unlabeled_input,
    fix=label_input,
    order=30,
    tag_name="input"
)
