# src/remediator/dom/registry.py
import importlib
import logging
import pkgutil
from typing import Any, List

from .core import ContentRule, TagHook, TagRuleDefinition
from remediator.rules.buttons import fix_empty_buttons
from remediator.rules.labels import fix_duplicate_labels, fix_orphaned_labels
from remediator.rules.links import fix_empty_links

logger = logging.getLogger(__name__)


class RuleRegistry:
    """
    Registry for the tag rules, tag hooks and content rules of one pipeline.

    Built-in tag rules are discovered from the 'remediator.dom.elements'
    package. Collaborators extend a registry with add_tag_hook() and
    add_content_rule() before it is handed to the pipeline; registration
    order is evaluation order.
    """

    ELEMENTS_PACKAGE = "remediator.dom.elements"

    def __init__(self, discover: bool = True):
        self._tag_rules: List[TagRuleDefinition] = []
        self._tag_hooks: List[Any] = []
        self._content_rules: List[Any] = []
        self._loaded = False

        if discover:
            self.discover()
            self._register_builtin_content_rules()

    def discover(self) -> None:
        """
        Discovers and registers all tag rule definitions in the elements package.

        Each module with a `DEFINITION` attribute (instance of `TagRuleDefinition`)
        contributes one rule. Rules are kept sorted by their `order`.
        """
        if self._loaded:
            return

        try:
            elements_pkg = importlib.import_module(self.ELEMENTS_PACKAGE)

            for _, name, _ in pkgutil.iter_modules(elements_pkg.__path__):
                full_name = f"{self.ELEMENTS_PACKAGE}.{name}"
                try:
                    module = importlib.import_module(full_name)
                    if hasattr(module, "DEFINITION") and isinstance(module.DEFINITION, TagRuleDefinition):
                        self.add_tag_rule(module.DEFINITION)
                        logger.debug("Tag rule loaded: %s", module.DEFINITION.name)
                except Exception as e:
                    logger.error("Error loading tag rule module %s: %s", name, e)

            self._loaded = True
        except ImportError as e:
            logger.error("Could not find elements package: %s", e)

    def _register_builtin_content_rules(self) -> None:
        for rule in (fix_empty_links, fix_empty_buttons, fix_duplicate_labels, fix_orphaned_labels):
            self.add_content_rule(rule)

    # --- Registration ---

    def add_tag_rule(self, definition: TagRuleDefinition) -> None:
        self._tag_rules.append(definition)
        self._tag_rules.sort(key=lambda rule: rule.order)

    def add_tag_hook(self, hook: TagHook) -> None:
        """Appends a per-tag hook, invoked for tags no built-in rule handled."""
        self._tag_hooks.append(hook)

    def add_content_rule(self, rule: ContentRule) -> None:
        """Appends a content rule; it runs after every rule registered before it."""
        self._content_rules.append(rule)

    # --- Access ---

    @property
    def tag_rules(self) -> List[TagRuleDefinition]:
        return list(self._tag_rules)

    @property
    def tag_hooks(self) -> List[Any]:
        return list(self._tag_hooks)

    @property
    def content_rules(self) -> List[Any]:
        return list(self._content_rules)
