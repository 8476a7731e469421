# src/remediator/filters/empty_block_filter.py
import logging
from typing import Any, Dict, Iterable, Optional, Set

from remediator.model import DEFAULT_EMPTY_BLOCKS
from remediator.utils.html_utils import strip_tags

logger = logging.getLogger(__name__)


class EmptyBlockFilter:
    """
    Suppresses rendered blocks whose text content is blank.

    Only block types in the configured set are checked (headings, titles,
    buttons, navigation links: blocks that are a defect when empty).
    """

    def __init__(self, block_types: Optional[Iterable[str]] = None):
        self._block_types: Set[str] = set(DEFAULT_EMPTY_BLOCKS if block_types is None else block_types)

    @property
    def block_types(self) -> Set[str]:
        return set(self._block_types)

    def add(self, block_type: str) -> None:
        self._block_types.add(block_type)

    def remove(self, block_type: str) -> None:
        self._block_types.discard(block_type)

    def apply(self, block_name: Optional[str], content: str, attrs: Optional[Dict[str, Any]] = None) -> str:
        """
        Returns an empty string for an eligible block without text, else the content unchanged.
        """
        if block_name not in self._block_types:
            return content

        # Strip tags and whitespace to check for actual content
        if strip_tags(content) == "":
            logger.debug("Suppressed empty %s block.", block_name)
            return ""

        return content
