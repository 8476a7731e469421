# src/remediator/utils/html_utils.py
import html
import re

from bs4 import BeautifulSoup

# Attribute-level regexes shared by the content rules. They operate on the raw
# attribute text of an opening tag, not on a parsed tree.
HREF_PATTERN = re.compile(r'href\s*=\s*["\']([^"\']+)', re.IGNORECASE)
CLASS_PATTERN = re.compile(r'class\s*=\s*["\']([^"\']+)', re.IGNORECASE)
IMG_ALT_PATTERN = re.compile(r'<img[^>]+alt\s*=\s*["\']([^"\']+)', re.IGNORECASE)
QUOTED_VALUE_PATTERN = re.compile(r'"[^"]*"|\'[^\']*\'')


def strip_tags(fragment: str) -> str:
    """
    Returns the visible text of an HTML fragment with all tags removed and
    surrounding whitespace trimmed. Comments and the contents of script, style
    and template elements do not count as text; character references are
    decoded, so a lone &nbsp; is blank.
    """
    if not fragment:
        return ""
    if "<" not in fragment:
        return html.unescape(fragment).strip()
    soup = BeautifulSoup(fragment, "html.parser")
    return soup.get_text().strip()


def escape_attr(value: str) -> str:
    """Escapes a value for use inside a double-quoted attribute."""
    return html.escape(value, quote=True)


def attribute_names(attrs: str) -> str:
    """Raw attribute text with quoted values emptied, so only names and '=' remain."""
    return QUOTED_VALUE_PATTERN.sub('""', attrs)
