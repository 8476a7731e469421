# src/remediator/plugins/manager.py
import importlib.util
import logging
from pathlib import Path
from typing import Iterable, List, Union

from remediator.dom.registry import RuleRegistry
from remediator.utils.path_utils import PathUtils
from .base import PluginBase

logger = logging.getLogger(__name__)


class PluginManager:
    """Discovers plugin modules and lets them register their rules."""

    def __init__(self, plugin_dir: Union[str, Path, None] = None):
        self.plugin_dir = Path(plugin_dir) if plugin_dir else PathUtils.get_plugins_dir()
        logger.debug("Plugin directory is set to: %s", self.plugin_dir)

    def discover_plugins(self) -> List[str]:
        """
        Searches for plugin files (*_plugin.py) in the plugin directory and all subdirectories.

        Returns:
            List[str]: A sorted list of plugin base names (without the '_plugin.py' suffix).
        """
        if not self.plugin_dir.exists():
            return []
        return sorted(path.stem.removesuffix("_plugin") for path in self.plugin_dir.glob("**/*_plugin.py"))

    def load_plugin(self, plugin_name: str, registry: RuleRegistry) -> bool:
        """
        Imports a plugin and lets it register its rules.

        Args:
            plugin_name (str): The base name of the plugin (e.g., 'fluentforms').
            registry (RuleRegistry): The registry the plugin extends.

        Returns:
            bool: True when the plugin registered successfully.
        """
        plugin_name_base = plugin_name if plugin_name.endswith("_plugin") else f"{plugin_name}_plugin"
        plugin_files = list(self.plugin_dir.glob(f"**/{plugin_name_base}.py"))

        if not plugin_files:
            logger.error("Plugin '%s' not found in %s", plugin_name, self.plugin_dir)
            return False

        plugin_file = plugin_files[0]

        try:
            # Dynamically import the module from the file path
            spec = importlib.util.spec_from_file_location(plugin_name_base, plugin_file)
            if not spec or not spec.loader:
                raise ImportError(f"Could not create a module spec for {plugin_file}")

            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)

            plugin_class = None
            # Find the class that inherits from PluginBase
            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if isinstance(attr, type) and issubclass(attr, PluginBase) and attr is not PluginBase:
                    plugin_class = attr
                    break

            if not plugin_class:
                raise TypeError("Plugin file must contain a class inheriting from PluginBase.")

            plugin_class().register(registry)
            logger.info("Plugin '%s' registered.", plugin_name)
            return True

        except Exception as e:
            logger.error("Failed to load plugin '%s': %s", plugin_name, e, exc_info=True)
            return False

    def load_plugins(self, plugin_names: Iterable[str], registry: RuleRegistry) -> int:
        """Loads several plugins in order and returns how many succeeded."""
        return sum(1 for name in plugin_names if self.load_plugin(name, registry))
