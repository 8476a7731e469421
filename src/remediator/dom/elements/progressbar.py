from ..core import TagRuleDefinition, has_accessible_name
from ..cursor import TagCursor
from remediator.services.label_service import derive_progress_label, resolve_percentage


def is_unlabeled_progressbar(cursor: TagCursor, tag_name: str) -> bool:
    return cursor.get_attribute("role") == "progressbar" and not has_accessible_name(cursor)


def label_progressbar(cursor: TagCursor) -> None:
    pct = resolve_percentage(cursor.get_attribute("aria-valuenow"), cursor.get_attribute("style"))
    cursor.set_attribute("aria-label", derive_progress_label(pct))


# --- DEFINITION ---
DEFINITION = TagRuleDefinition(
    name="progressbar",
    applies=is_unlabeled_progressbar,
    fix=label_progressbar,
    order=10
)
