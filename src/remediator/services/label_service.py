# src/remediator/services/label_service.py
"""
Accessible-name heuristics.

Every function here is pure: it maps attribute values of one element to a
human readable label and never returns None. Missing inputs fall through to
the generic defaults ("Link", "Button", "Input field").
"""
import re
from typing import Optional

from remediator.utils.label_tables import (
    BUTTON_LABELS,
    DEFAULT_BUTTON_LABEL,
    DEFAULT_INPUT_LABEL,
    DEFAULT_LINK_LABEL,
    INPUT_LABELS,
    SOCIAL_LABELS,
    LabelTable,
)

_NAME_SEPARATORS = re.compile(r'[\[\]_-]+')
_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')
_STYLE_WIDTH = re.compile(r'width:\s*(\d+)%')


def match_label(haystack: Optional[str], table: LabelTable, default: str) -> str:
    """
    Returns the label of the first table key found in the haystack.

    The haystack is lowercased and compared by substring containment, in the
    declared order of the table.

    Args:
        haystack (Optional[str]): A URL, class list or input type.
        table (LabelTable): Ordered (key, label) pairs.
        default (str): Returned when no key matches.

    Returns:
        str: The matched label or the default.
    """
    if not haystack:
        return default
    haystack = haystack.lower()
    for key, label in table:
        if key in haystack:
            return label
    return default


def derive_link_label(href: Optional[str]) -> str:
    """Derives a link label from its href (mail, phone, social platform)."""
    if not href:
        return DEFAULT_LINK_LABEL

    url = href.strip().lower()
    if url.startswith("mailto:"):
        return "Email"
    if url.startswith("tel:"):
        return "Phone"
    return match_label(url, SOCIAL_LABELS, DEFAULT_LINK_LABEL)


def derive_button_label(class_attr: Optional[str]) -> str:
    return match_label(class_attr, BUTTON_LABELS, DEFAULT_BUTTON_LABEL)


def humanize_name(name: str) -> str:
    """
    Turns a form field name into words: 'billing[first_name]' -> 'Billing First Name'.
    Only the first letter of each word is changed.
    """
    words = _NAME_SEPARATORS.sub(" ", name).strip().split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def derive_input_label(
        input_type: Optional[str],
        placeholder: Optional[str] = None,
        name: Optional[str] = None
) -> str:
    """
    Derives an input label.

    Priority: placeholder -> humanized name -> input type table -> "Input field".
    """
    if placeholder and placeholder.strip():
        return placeholder

    if name:
        label = humanize_name(name)
        if label:
            return label

    return match_label(input_type or "text", INPUT_LABELS, DEFAULT_INPUT_LABEL)


def resolve_percentage(valuenow: Optional[str], style: Optional[str]) -> Optional[int]:
    """
    Resolves the completion percentage of a progress indicator.

    aria-valuenow wins over the inline style width. A non numeric valuenow
    is ignored rather than read as zero.
    """
    if valuenow is not None:
        match = _LEADING_INT.match(valuenow)
        if match:
            return int(match.group(1))

    if style:
        match = _STYLE_WIDTH.search(style)
        if match:
            return int(match.group(1))

    return None


def derive_progress_label(percentage: Optional[int]) -> str:
    if percentage is None:
        return "Progress indicator"
    return f"Progress: {percentage}% complete"
