# tests/core/test_tag_cursor.py
import pytest

from remediator.dom.cursor import TagCursor


def _walk(cursor: TagCursor) -> list:
    names = []
    while cursor.advance():
        names.append(cursor.tag_name)
    return names


def test_untouched_document_is_byte_identical():
    html = "<!DOCTYPE html>\n<html><body><p class=x data-a='1'>Hi</p><br/></body></html>"
    cursor = TagCursor(html)
    assert _walk(cursor) == ["html", "body", "p", "br"]
    assert cursor.serialize() == html


def test_advance_with_tag_filter_is_case_insensitive():
    cursor = TagCursor('<div><img src="a.png"><span></span><IMG SRC="b.png"></div>')
    assert cursor.advance("img")
    assert cursor.get_attribute("src") == "a.png"
    assert cursor.advance("IMG")
    assert cursor.get_attribute("SRC") == "b.png"
    assert cursor.tag_name == "img"
    assert cursor.advance("img") is False
    assert cursor.tag_name is None


def test_new_attribute_is_inserted_after_the_tag_name():
    cursor = TagCursor('<img src="a.png">')
    cursor.advance()
    cursor.set_attribute("alt", "")
    assert cursor.serialize() == '<img alt="" src="a.png">'


def test_existing_attribute_is_rewritten_in_place():
    cursor = TagCursor('<a href="/x" aria-label=old>text</a>')
    cursor.advance("a")
    cursor.set_attribute("aria-label", "New")
    assert cursor.serialize() == '<a href="/x" aria-label="New">text</a>'


def test_remove_attribute_drops_it_with_its_whitespace():
    cursor = TagCursor('<label for="f" class="c">Name</label>')
    cursor.advance()
    cursor.remove_attribute("FOR")
    assert cursor.serialize() == '<label class="c">Name</label>'


def test_remove_missing_attribute_changes_nothing():
    html = '<label class="c">Name</label>'
    cursor = TagCursor(html)
    cursor.advance()
    cursor.remove_attribute("for")
    assert cursor.serialize() == html


def test_values_are_escaped_on_write_and_decoded_on_read():
    cursor = TagCursor('<a title="Tom &amp; Jerry" href="/">x</a>')
    cursor.advance()
    assert cursor.get_attribute("title") == "Tom & Jerry"
    cursor.set_attribute("aria-label", 'Say "hi" & <bye>')
    assert cursor.serialize() == (
        '<a aria-label="Say &quot;hi&quot; &amp; &lt;bye&gt;" title="Tom &amp; Jerry" href="/">x</a>'
    )


def test_staged_mutations_are_visible_through_the_cursor():
    cursor = TagCursor('<input type="text" name="q">')
    cursor.advance()
    cursor.set_attribute("aria-label", "Search")
    assert cursor.get_attribute("aria-label") == "Search"
    cursor.set_attribute("aria-label", "Query")
    assert cursor.get_attribute("aria-label") == "Query"
    cursor.remove_attribute("name")
    assert cursor.get_attribute("name") is None
    assert cursor.serialize() == '<input aria-label="Query" type="text">'


def test_valueless_and_duplicate_attributes():
    cursor = TagCursor('<input disabled type="text" ID="a" id="b">')
    cursor.advance()
    assert cursor.get_attribute("disabled") == ""
    assert cursor.get_attribute("missing") is None
    # The first occurrence wins.
    assert cursor.get_attribute("id") == "a"


def test_comments_and_raw_text_are_not_scanned():
    html = '<!-- <img src="c.png"> --><script>var s = "<img src=\'js.png\'>";</script><img src="real.png">'
    cursor = TagCursor(html)
    assert cursor.advance("img")
    assert cursor.get_attribute("src") == "real.png"
    assert cursor.advance("img") is False


def test_unterminated_tag_is_left_untouched():
    html = '<p>ok</p><img src="x.png"'
    cursor = TagCursor(html)
    assert cursor.advance("img") is False
    assert cursor.serialize() == html


def test_stray_angle_brackets_do_not_break_scanning():
    html = '<p>1 < 2 and 3 <= 4</p><img src="a.png">'
    cursor = TagCursor(html)
    assert cursor.advance("img")
    cursor.set_attribute("alt", "")
    assert cursor.serialize() == '<p>1 < 2 and 3 <= 4</p><img alt="" src="a.png">'


def test_self_closing_tag_keeps_its_slash():
    cursor = TagCursor('<img src="a.png"/>')
    cursor.advance()
    cursor.set_attribute("alt", "")
    assert cursor.serialize() == '<img alt="" src="a.png"/>'


def test_mutations_on_several_tags_accumulate():
    cursor = TagCursor('<img src="a"><p>t</p><img src="b">')
    while cursor.advance("img"):
        cursor.set_attribute("alt", "")
    expected = '<img alt="" src="a"><p>t</p><img alt="" src="b">'
    assert cursor.serialize() == expected
    # Serializing again is stable.
    assert cursor.serialize() == expected


def test_mutation_without_current_tag_is_a_noop():
    cursor = TagCursor("<p>text</p>")
    cursor.set_attribute("class", "x")
    cursor.remove_attribute("class")
    assert cursor.get_attribute("class") is None
    assert cursor.serialize() == "<p>text</p>"


@pytest.mark.parametrize("html", ["", "plain text", "<", "<!-- open comment", "</div>"])
def test_degenerate_inputs(html):
    cursor = TagCursor(html)
    assert cursor.advance() is False
    assert cursor.serialize() == html
