# src/remediator/rules/links.py
import logging
import re

from remediator.services.label_service import derive_link_label
from remediator.utils.html_utils import HREF_PATTERN, IMG_ALT_PATTERN, attribute_names, escape_attr, strip_tags

logger = logging.getLogger(__name__)

ANCHOR_PATTERN = re.compile(r'<a(\s[^>]*)?>(.*?)</a\s*>', re.IGNORECASE | re.DOTALL)
NAMED_ANCHOR_PATTERN = re.compile(
    r'(?<![\w-])(?:aria-label(?:ledby)?|title)(?=\s*=|[\s/>]|$)', re.IGNORECASE
)


def visible_text(content: str) -> str:
    """Text of the anchor content, falling back to the alt of a nested image."""
    text = strip_tags(content)
    if not text:
        alt = IMG_ALT_PATTERN.search(content)
        if alt:
            text = alt.group(1).strip()
    return text


def fix_empty_links(html: str) -> str:
    """
    Adds an aria-label to links without text, nested image alt or existing name.
    The label is derived from the href (mail, phone, social platform).
    """
    fixed = 0

    def _fix(match: re.Match) -> str:
        nonlocal fixed
        attrs = match.group(1) or ""
        content = match.group(2)

        if NAMED_ANCHOR_PATTERN.search(attribute_names(attrs)) or visible_text(content):
            return match.group(0)

        href = HREF_PATTERN.search(attrs)
        label = derive_link_label(href.group(1) if href else None)
        fixed += 1
        original = match.group(0)
        return f'{original[:2]} aria-label="{escape_attr(label)}"{original[2:]}'

    result = ANCHOR_PATTERN.sub(_fix, html)
    if fixed:
        logger.debug("Labeled %d empty link(s).", fixed)
    return result
