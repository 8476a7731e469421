# src/remediator/rules/buttons.py
import logging
import re

from remediator.services.label_service import derive_button_label
from remediator.utils.html_utils import CLASS_PATTERN, attribute_names, escape_attr, strip_tags

logger = logging.getLogger(__name__)

BUTTON_PATTERN = re.compile(r'<button(\s[^>]*)?>(.*?)</button\s*>', re.IGNORECASE | re.DOTALL)
NAMED_BUTTON_PATTERN = re.compile(
    r'(?<![\w-])(?:aria-label(?:ledby)?|title|value)(?=\s*=|[\s/>]|$)', re.IGNORECASE
)


def fix_empty_buttons(html: str) -> str:
    """Adds an aria-label to icon-only buttons, derived from their class list."""
    fixed = 0

    def _fix(match: re.Match) -> str:
        nonlocal fixed
        attrs = match.group(1) or ""
        content = match.group(2)

        if NAMED_BUTTON_PATTERN.search(attribute_names(attrs)) or strip_tags(content):
            return match.group(0)

        css_class = CLASS_PATTERN.search(attrs)
        label = derive_button_label(css_class.group(1) if css_class else None)
        fixed += 1
        original = match.group(0)
        return f'{original[:7]} aria-label="{escape_attr(label)}"{original[7:]}'

    result = BUTTON_PATTERN.sub(_fix, html)
    if fixed:
        logger.debug("Labeled %d empty button(s).", fixed)
    return result
