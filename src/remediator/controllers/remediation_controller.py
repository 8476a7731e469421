# src/remediator/controllers/remediation_controller.py
import logging
from typing import Optional

from remediator.dom.cursor import TagCursor
from remediator.dom.registry import RuleRegistry
from remediator.model import RemediationSettings
from remediator.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class RemediationController:
    """
    Runs the accessibility fixes over one full page response.

    The tag pass visits every opening tag once and applies the first matching
    tag rule (or, when none matches, the registered tag hooks). The content
    pass then feeds the serialized document through the content rules in
    registration order, each rule receiving the previous rule's output.
    """

    def __init__(
            self,
            registry: Optional[RuleRegistry] = None,
            settings: Optional[RemediationSettings] = None
    ):
        self.registry = registry or RuleRegistry()
        self.settings = settings or RemediationSettings()

    def is_document(self, html: str) -> bool:
        """Only full pages are processed; fragments and API payloads are not."""
        if not html:
            return False
        return self.settings.document_marker.lower() in html.lower()

    def process(self, html: str) -> str:
        """
        Applies all fixes to a page.

        Args:
            html (str): The complete response body.

        Returns:
            str: The remediated body, or the input unchanged when it is not a full page.
        """
        if not self.is_document(html):
            return html

        html = self.run_tag_pass(html)
        return self.run_content_pass(html)

    def run_tag_pass(self, html: str) -> str:
        """Single traversal over all opening tags; first applicable rule wins."""
        cursor = TagCursor(html)
        rules = self.registry.tag_rules
        hooks = self.registry.tag_hooks

        while cursor.advance():
            tag_name = cursor.tag_name

            handled = False
            for rule in rules:
                if rule.tag_name is not None and rule.tag_name != tag_name:
                    continue
                if rule.applies(cursor, tag_name):
                    rule.fix(cursor)
                    handled = True
                    break
            if handled:
                continue

            for hook in hooks:
                if not callable(hook):
                    continue
                try:
                    hook(cursor, tag_name)
                except Exception as e:
                    logger.warning("Tag hook %r failed on <%s>: %s", hook, tag_name, e, exc_info=True)

        return cursor.serialize()

    def run_content_pass(self, html: str) -> str:
        """Runs every content rule in order. A failing rule leaves its input unchanged."""
        for rule in self.registry.content_rules:
            if not callable(rule):
                logger.debug("Skipping non-callable content rule %r", rule)
                continue
            try:
                result = rule(html)
            except Exception as e:
                logger.warning("Content rule %r failed, keeping its input: %s", rule, e, exc_info=True)
                continue
            if isinstance(result, str):
                html = result
            else:
                logger.warning("Content rule %r returned %s instead of a string; ignored.",
                               rule, type(result).__name__)
        return html

    @classmethod
    def from_settings(
            cls,
            settings: RemediationSettings,
            plugin_manager: Optional[PluginManager] = None
    ) -> "RemediationController":
        """
        Builds a controller with the built-in rules plus the plugins enabled in the settings.
        """
        registry = RuleRegistry()
        if settings.plugins:
            manager = plugin_manager or PluginManager()
            loaded = manager.load_plugins(settings.plugins, registry)
            logger.debug("Loaded %d of %d configured plugin(s).", loaded, len(settings.plugins))
        return cls(registry=registry, settings=settings)
