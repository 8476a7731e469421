# src/remediator/plugins/base.py
import abc

from remediator.dom.registry import RuleRegistry


class PluginBase(metaclass=abc.ABCMeta):
    """
    Abstract base class for all remediation plugins.

    A plugin contributes tag hooks and/or content rules to a RuleRegistry.
    """
    @abc.abstractmethod
    def register(self, registry: RuleRegistry) -> None:
        """
        Adds the plugin's rules to the registry.

        Args:
            registry: The registry of the pipeline being set up. Rules are
                      appended after the ones already registered.
        """
        raise NotImplementedError("Every plugin must implement a 'register' method.")
