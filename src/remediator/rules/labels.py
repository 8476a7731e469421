# src/remediator/rules/labels.py
import html as html_lib
import logging
import re

from remediator.utils.html_utils import strip_tags

logger = logging.getLogger(__name__)

LABEL_PATTERN = re.compile(r'<label(\s[^>]*)>(.*?)</label\s*>', re.IGNORECASE | re.DOTALL)
ARIA_LABEL_ATTR = re.compile(
    r'\s+aria-label\s*=\s*(?:"(?P<dq>[^"]*)"|\'(?P<sq>[^\']*)\')', re.IGNORECASE
)
BARE_LABEL_PATTERN = re.compile(r'<label\s*>([^<]*)</label\s*>', re.IGNORECASE)


def fix_duplicate_labels(html: str) -> str:
    """
    Removes the aria-label of a <label> when it repeats the label's own text.
    The visible text already names the control.
    """
    fixed = 0

    def _fix(match: re.Match) -> str:
        nonlocal fixed
        attrs = match.group(1)
        aria = ARIA_LABEL_ATTR.search(attrs)
        if not aria:
            return match.group(0)

        value = aria.group("dq") if aria.group("dq") is not None else aria.group("sq")
        text = strip_tags(match.group(2))
        if not text or html_lib.unescape(value).strip().casefold() != text.casefold():
            return match.group(0)

        fixed += 1
        # Offsets of the attribute inside the full match.
        start = aria.start() + len("<label")
        end = aria.end() + len("<label")
        original = match.group(0)
        return original[:start] + original[end:]

    result = LABEL_PATTERN.sub(_fix, html)
    if fixed:
        logger.debug("Removed %d redundant label aria-label(s).", fixed)
    return result


def fix_orphaned_labels(html: str) -> str:
    """
    Rewrites bare <label> elements (no attributes, plain text only) to <span>.
    Without a 'for' or an enclosed control they label nothing.
    """
    result, count = BARE_LABEL_PATTERN.subn(r'<span>\1</span>', html)
    if count:
        logger.debug("Rewrote %d orphaned label(s) to span.", count)
    return result
