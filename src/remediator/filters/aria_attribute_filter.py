# src/remediator/filters/aria_attribute_filter.py
import logging
from typing import Iterable, Optional

from remediator.dom.cursor import TagCursor
from remediator.model import BlockContext

logger = logging.getLogger(__name__)

DECORATIVE_IMAGE_BLOCKS = ("core/image", "core/cover")


class AriaAttributeFilter:
    """
    Applies the aria-label / aria-hidden values an author set on a block to
    the block's rendered markup.

    For a block wrapping exactly one link the label goes on the link itself
    and is taken off the wrapper, so it is announced once.
    """

    def __init__(self, native_aria_label_blocks: Optional[Iterable[str]] = None):
        self.native_aria_label_blocks = set(native_aria_label_blocks or [])

    def apply(self, content: str, block: BlockContext) -> str:
        if not block.name:
            return content

        attrs = block.attrs
        aria_label = attrs.get("ariaLabel") or None
        aria_hidden = bool(attrs.get("ariaHidden"))
        is_decorative_image = block.name in DECORATIVE_IMAGE_BLOCKS and attrs.get("alt") == ""

        if not content and not aria_label and not aria_hidden and not is_decorative_image:
            return content

        link_count = self._count_links(content)

        target_tag: Optional[str] = None
        if link_count == 1:
            target_tag = "a"
        elif link_count == 0 and block.name == "core/image":
            target_tag = "img"

        tags = TagCursor(content)
        if tags.advance(target_tag):
            if aria_label and (target_tag is not None or block.name not in self.native_aria_label_blocks):
                tags.set_attribute("aria-label", aria_label)
            if aria_hidden:
                tags.set_attribute("aria-hidden", "true")
        content = tags.serialize()

        if link_count == 1:
            # Re-scan the output: the wrapper must not repeat the link's label.
            wrapper = TagCursor(content)
            if wrapper.advance() and wrapper.tag_name != "a":
                wrapper.remove_attribute("aria-label")
            content = wrapper.serialize()

        if is_decorative_image and not aria_hidden:
            img = TagCursor(content)
            if img.advance("img"):
                img.set_attribute("aria-hidden", "true")
                content = img.serialize()

        return content

    @staticmethod
    def _count_links(content: str) -> int:
        tags = TagCursor(content)
        count = 0
        while tags.advance("a"):
            count += 1
        return count
