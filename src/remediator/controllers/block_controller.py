# src/remediator/controllers/block_controller.py
import logging
from typing import Any, Dict, Optional, Union

from remediator.filters.aria_attribute_filter import AriaAttributeFilter
from remediator.filters.empty_block_filter import EmptyBlockFilter
from remediator.model import BlockContext, RemediationSettings

logger = logging.getLogger(__name__)


class BlockController:
    """
    Per-block render hook: applies author aria attributes, then drops the
    block when it is an eligible type without text.
    """

    def __init__(self, settings: Optional[RemediationSettings] = None):
        settings = settings or RemediationSettings()
        self.aria_filter = AriaAttributeFilter(settings.native_aria_label_blocks)
        self.empty_filter = EmptyBlockFilter(settings.empty_blocks)

    def render_block(self, content: str, block: Union[BlockContext, Dict[str, Any]]) -> str:
        if not isinstance(block, BlockContext):
            block = BlockContext.model_validate(block)

        content = self.aria_filter.apply(content, block)
        return self.empty_filter.apply(block.name, content, block.attrs)
