# tests/core/test_plugins.py
import pytest

from remediator.controllers.remediation_controller import RemediationController
from remediator.plugins.manager import PluginManager
from remediator.plugins.modules.fluentforms_plugin import fix_upload_holder_labels


@pytest.fixture
def plugin_manager():
    return PluginManager()


def test_bundled_plugins_are_discovered(plugin_manager):
    assert "fluentforms" in plugin_manager.discover_plugins()


def test_plugin_registers_after_builtin_rules(plugin_manager, registry):
    assert plugin_manager.load_plugin("fluentforms", registry) is True
    assert len(registry.tag_hooks) == 1
    assert [rule.__name__ for rule in registry.content_rules][-1] == "fix_upload_holder_labels"


def test_upload_holder_label_loses_its_for_during_tag_pass(plugin_manager, registry):
    plugin_manager.load_plugin("fluentforms_plugin", registry)
    controller = RemediationController(registry=registry)

    html = '<html><body><label class="ff-el-input ff_file_upload_holder" for="file_1">Upload</label></body></html>'
    result = controller.process(html)

    assert '<label class="ff-el-input ff_file_upload_holder">Upload</label>' in result


@pytest.mark.parametrize("html", [
    '<label for="ff_1_file" class="ff_file_upload_holder">',
    '<label class="ff_file_upload_holder" for="ff_1_file">',
])
def test_upload_holder_content_rule_handles_both_orders(html):
    assert fix_upload_holder_labels(html) == '<label class="ff_file_upload_holder">'


def test_other_labels_keep_their_for():
    html = '<label for="name" class="ff-el-input--label">Name</label>'
    assert fix_upload_holder_labels(html) == html


def test_unknown_plugin_is_reported(plugin_manager, registry):
    assert plugin_manager.load_plugin("does_not_exist", registry) is False


def test_broken_plugins_do_not_register_anything(tmp_path, registry):
    (tmp_path / "broken_plugin.py").write_text("raise RuntimeError('boom')\n")
    (tmp_path / "classless_plugin.py").write_text("VALUE = 1\n")
    manager = PluginManager(tmp_path)

    assert manager.discover_plugins() == ["broken", "classless"]
    assert manager.load_plugins(["broken", "classless"], registry) == 0
    assert registry.tag_hooks == []


def test_custom_plugin_directory(tmp_path, registry):
    (tmp_path / "shout_plugin.py").write_text(
        "from remediator.plugins.base import PluginBase\n"
        "\n"
        "class ShoutPlugin(PluginBase):\n"
        "    def register(self, registry):\n"
        "        registry.add_content_rule(lambda html: html.replace('hi', 'HI'))\n"
    )
    manager = PluginManager(tmp_path)

    assert manager.load_plugin("shout", registry) is True
    controller = RemediationController(registry=registry)
    assert controller.process("<html>hi</html>") == "<html>HI</html>"
