# src/remediator/plugins/modules/fluentforms_plugin.py
"""
Fixes for the markup of the FluentForms form builder.

Its file upload field wraps the input in a second <label for="..."> that
only serves as a click target, which gives the input two labels.
"""
import re

from remediator.dom.cursor import TagCursor
from remediator.dom.registry import RuleRegistry
from remediator.plugins.base import PluginBase

UPLOAD_HOLDER_CLASS = "ff_file_upload_holder"

_FOR_BEFORE_CLASS = re.compile(r'<label\s+for="[^"]+"\s+class="ff_file_upload_holder"')
_CLASS_BEFORE_FOR = re.compile(r'<label\s+class="ff_file_upload_holder"\s+for="[^"]+"')


def strip_upload_holder_for(cursor: TagCursor, tag_name: str) -> None:
    """Tag hook: drops 'for' from upload wrapper labels during the tag pass."""
    if tag_name != "label":
        return
    css_class = cursor.get_attribute("class")
    if css_class and UPLOAD_HOLDER_CLASS in css_class:
        cursor.remove_attribute("for")


def fix_upload_holder_labels(html: str) -> str:
    """Content rule for the same wrapper, in both attribute orders."""
    replacement = f'<label class="{UPLOAD_HOLDER_CLASS}"'
    html = _FOR_BEFORE_CLASS.sub(replacement, html)
    return _CLASS_BEFORE_FOR.sub(replacement, html)


class FluentFormsPlugin(PluginBase):

    def register(self, registry: RuleRegistry) -> None:
        registry.add_tag_hook(strip_upload_holder_for)
        registry.add_content_rule(fix_upload_holder_labels)
