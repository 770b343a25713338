from __future__ import annotations

import logging

from revisiondiff import Normalization, normalize
from revisiondiff.normalization import HR_LINE, filter_tags


def test_passthrough_keeps_markup():
    assert normalize("none", "<b>x</b>\n") == "<b>x</b>\n"
    assert normalize(Normalization.NONE, "<b>x</b>") == "<b>x</b>"
    assert normalize(None, "<b>x</b>") == "<b>x</b>"
    assert normalize("", "<b>x</b>") == "<b>x</b>"


def test_unknown_strategy_falls_back_to_passthrough(caplog):
    with caplog.at_level(logging.WARNING):
        assert normalize("markdown_extra", "<p>x</p>") == "<p>x</p>"
    assert "unknown normalization strategy" in caplog.text


def test_non_text_values():
    assert normalize("html_to_text", None) == ""
    assert normalize("none", 42) == "42"


def test_html_to_text_paragraphs_and_breaks():
    assert normalize("html_to_text", "<p>Hello</p><p>World</p>") == "Hello\n\nWorld"
    assert normalize("html_to_text", "Line one<br>Line two") == "Line one\nLine two"
    assert normalize("html_to_text", "<div>a</div><div>b</div>") == "a\nb"


def test_html_to_text_lists_and_rules():
    assert normalize("html_to_text", "<ul><li>One</li><li> Two </li></ul>") == "* One\n* Two"
    assert normalize("html_to_text", "a<hr>b") == "a\n" + HR_LINE + "\nb"


def test_html_to_text_decodes_entities_and_collapses_whitespace():
    html = "<p>Fish &amp;   chips&nbsp;today</p>"
    assert normalize("html_to_text", html) == "Fish & chips today"


def test_html_to_text_trims_newlines():
    assert normalize("html_to_text", "\n\n<p>x</p>\n\n") == "x"


def test_html_to_text_keeps_preformatted_text():
    assert normalize("html_to_text", "<pre>a  b\n  c</pre>") == "a  b\n  c"


def test_html_to_text_drops_scripts_and_comments():
    html = "<p>Hi<!-- note --> there</p><script>alert(1)</script>"
    assert normalize("html_to_text", html) == "Hi there"


def test_filter_tags_keeps_allowed_markup_only():
    html = (
        '<p onclick="steal()">Hi <a href="javascript:alert(1)" title="t">link</a> '
        "<em>now</em><script>bad()</script></p>"
    )
    assert normalize("filter_tags", html) == 'Hi <a title="t">link</a> <em>now</em>'


def test_filter_tags_drops_event_handlers_but_keeps_safe_links():
    html = '<a href="https://example.com" onmouseover="x()">x</a>'
    assert normalize("filter_tags", html) == '<a href="https://example.com">x</a>'


def test_filter_tags_trims_newlines():
    assert normalize("filter_tags", "\n<em>x</em>\n") == "<em>x</em>"


def test_filter_tags_custom_allow_list():
    assert filter_tags("<b>x</b> <em>y</em>", allowed_tags=frozenset(["b"])) == "<b>x</b> y"


def test_filter_all_tags_keeps_escaped_text():
    assert normalize("filter_all_tags", "<p>Fish &amp; <b>chips</b></p>") == "Fish &amp; chips"


def test_filter_strategies_keep_line_structure():
    text = "line one\n\n\nline two   spaced  \nthree"
    assert normalize("filter_tags", text) == text
    assert normalize("filter_all_tags", text) == text
    assert normalize("filter_tags", "<em>a</em>\n\n\nb") == "<em>a</em>\n\n\nb"


def test_html_to_text_numbers_ordered_lists():
    html = "<ol><li>a</li><li>b</li></ol><ul><li>c</li></ul>"
    assert normalize("html_to_text", html) == "1) a\n2) b\n\n* c"


def test_html_to_text_separates_table_cells():
    html = "<table><tr><td>a</td><td>b</td></tr><tr><th>c</th> <th>d</th></tr></table>"
    assert normalize("html_to_text", html) == "a | b\nc | d"


def test_html_to_text_lists_link_targets():
    html = (
        '<p>See <a href="https://a.example">docs</a> and '
        '<a href="https://a.example">again</a>, <a href="/b">b</a></p>'
    )
    assert normalize("html_to_text", html) == (
        "See docs [1] and again [1], b [2]\n\n[1] https://a.example\n[2] /b"
    )
    assert normalize("html_to_text", '<a href="x"></a>') == "[1]\n\n[1] x"


def test_html_to_text_marks_emphasis():
    html = "<p><em>a</em> and <strong>b</strong></p>"
    assert normalize("html_to_text", html) == "/a/ and *b*"
