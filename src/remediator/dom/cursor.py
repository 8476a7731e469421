# src/remediator/dom/cursor.py
import html
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

_TAG_NAME = re.compile(r'[a-zA-Z][^\s/>]*')
_GAP = re.compile(r'[\s/]*')
_ATTRIBUTE = re.compile(
    r'(?P<name>[^\s/>"\'=][^\s/>"\'=]*)'
    r'(?:\s*=\s*(?:"(?P<dq>[^"]*)"|\'(?P<sq>[^\']*)\'|(?P<uq>[^\s>]+)))?'
)

# Elements whose content is raw text: tags inside them are not markup.
RAW_TEXT_ELEMENTS = frozenset({"script", "style", "textarea", "title"})


@dataclass
class _Attribute:
    name: str
    raw_name: str
    value: str
    gap_start: int
    start: int
    end: int


@dataclass(eq=False)
class _Tag:
    name: str
    start: int
    name_end: int
    end: int
    attributes: List[_Attribute] = field(default_factory=list)
    # Staged mutations: lowercase name -> new value, or None for removal.
    pending: Dict[str, Optional[str]] = field(default_factory=dict)
    touched: bool = False

    def find(self, name: str) -> Optional[_Attribute]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None


class TagCursor:
    """
    Forward-only cursor over the opening tags of an HTML string.

    Attributes of the current tag can be read and changed. Changes are staged
    and only applied by serialize(), which rewrites exactly the touched
    attributes and leaves every other byte of the input as it was.
    """

    def __init__(self, html_text: str):
        self._html = html_text or ""
        self._pos = 0
        self._current: Optional[_Tag] = None
        self._touched: List[_Tag] = []

    @property
    def tag_name(self) -> Optional[str]:
        """Lowercase name of the current tag, or None before the first advance."""
        return self._current.name if self._current else None

    def advance(self, tag_name: Optional[str] = None) -> bool:
        """
        Moves to the next opening tag, optionally only to tags with the given name.

        Returns:
            bool: False once the end of the document is reached.
        """
        wanted = tag_name.lower() if tag_name else None
        while True:
            tag = self._next_tag()
            if tag is None:
                self._current = None
                return False
            if wanted is None or tag.name == wanted:
                self._current = tag
                return True

    def get_attribute(self, name: str) -> Optional[str]:
        """Case-insensitive attribute lookup on the current tag, including staged changes."""
        if self._current is None:
            return None
        key = name.lower()
        if key in self._current.pending:
            return self._current.pending[key]
        attr = self._current.find(key)
        return attr.value if attr else None

    def set_attribute(self, name: str, value: str) -> None:
        self._stage(name.lower(), str(value))

    def remove_attribute(self, name: str) -> None:
        key = name.lower()
        if self._current is None:
            return
        # Removing an attribute that never existed is not a change.
        if self._current.find(key) is None and key not in self._current.pending:
            return
        self._stage(key, None)

    def serialize(self) -> str:
        """Returns the full document with all staged mutations applied."""
        edits: List[Tuple[int, int, str]] = []
        for tag in self._touched:
            edits.extend(self._edits_for(tag))

        if not edits:
            return self._html

        edits.sort(key=lambda edit: (edit[0], edit[1]))
        parts = []
        cursor = 0
        for start, end, text in edits:
            parts.append(self._html[cursor:start])
            parts.append(text)
            cursor = end
        parts.append(self._html[cursor:])
        return "".join(parts)

    # --- Internals ---

    def _stage(self, key: str, value: Optional[str]) -> None:
        if self._current is None:
            return
        if not self._current.touched:
            self._current.touched = True
            self._touched.append(self._current)
        self._current.pending[key] = value

    @staticmethod
    def _edits_for(tag: _Tag) -> List[Tuple[int, int, str]]:
        edits = []
        for key, value in tag.pending.items():
            existing = [attr for attr in tag.attributes if attr.name == key]
            if value is None:
                for attr in existing:
                    edits.append((attr.gap_start, attr.end, ""))
            elif existing:
                first = existing[0]
                edits.append((first.start, first.end, f'{first.raw_name}="{html.escape(value, quote=True)}"'))
            else:
                edits.append((tag.name_end, tag.name_end, f' {key}="{html.escape(value, quote=True)}"'))
        return edits

    def _next_tag(self) -> Optional[_Tag]:
        """Scans forward from the current position to the next complete opening tag."""
        text = self._html
        length = len(text)

        while self._pos < length:
            lt = text.find("<", self._pos)
            if lt == -1 or lt + 1 >= length:
                self._pos = length
                return None

            nxt = text[lt + 1]
            if text.startswith("<!--", lt):
                close = text.find("-->", lt + 4)
                self._pos = length if close == -1 else close + 3
                continue
            if nxt in "!?/":
                close = text.find(">", lt + 2)
                self._pos = length if close == -1 else close + 1
                continue

            name_match = _TAG_NAME.match(text, lt + 1)
            if not name_match:
                # A stray '<' in text.
                self._pos = lt + 1
                continue

            tag = self._parse_tag(lt, name_match)
            if tag is None:
                # Unterminated tag at the end of the input stays untouched.
                logger.debug("Unterminated <%s> tag at offset %d, stopping scan.", name_match.group(0), lt)
                self._pos = length
                return None

            self._pos = tag.end
            if tag.name in RAW_TEXT_ELEMENTS:
                self._skip_raw_text(tag.name)
            return tag

        return None

    def _parse_tag(self, start: int, name_match: re.Match) -> Optional[_Tag]:
        text = self._html
        length = len(text)
        tag = _Tag(name=name_match.group(0).lower(), start=start, name_end=name_match.end(), end=-1)

        pos = name_match.end()
        while True:
            gap_start = pos
            pos = _GAP.match(text, pos).end()
            if pos >= length:
                return None
            if text[pos] == ">":
                tag.end = pos + 1
                return tag

            attr_match = _ATTRIBUTE.match(text, pos)
            if not attr_match:
                pos += 1
                continue

            value = attr_match.group("dq")
            if value is None:
                value = attr_match.group("sq")
            if value is None:
                value = attr_match.group("uq")
            raw_name = attr_match.group("name")
            tag.attributes.append(_Attribute(
                name=raw_name.lower(),
                raw_name=raw_name,
                value=html.unescape(value) if value else "",
                gap_start=gap_start,
                start=attr_match.start(),
                end=attr_match.end(),
            ))
            pos = attr_match.end()

    def _skip_raw_text(self, name: str) -> None:
        match = re.compile(rf'</{name}[\s>/]', re.IGNORECASE).search(self._html, self._pos)
        self._pos = match.start() if match else len(self._html)
