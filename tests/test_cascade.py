"""Tests for the selector cascade library."""
from codesync.extraction.cascade import (
    Probe,
    control_label,
    editor_model,
    first_hit,
    first_match,
    known_text,
    labelled_known_text,
    line_join,
    query_param,
    select_attribute,
    select_inner_text,
    substantial_text,
    textarea_scan,
)
from codesync.extraction.document import PageDocument


def constant(value, calls=None):
    def run(document):
        if calls is not None:
            calls.append(value)
        return value
    return Probe(f"const:{value}", run)


def page(html: str, url: str = "https://leetcode.com/problems/x/", editors=None) -> PageDocument:
    return PageDocument(url, html, editors)


class TestFirstMatch:
    """Ordering and success rules of the cascade walker."""

    def test_skips_empty_and_unknown_results(self):
        probes = [constant(None), constant(""), constant("   "), constant("unknown"), constant("x"), constant("y")]
        assert first_match(probes, page("")) == "x"

    def test_later_probes_are_not_evaluated(self):
        calls = []
        probes = [constant("first", calls), constant("second", calls)]
        assert first_match(probes, page("")) == "first"
        assert calls == ["first"]

    def test_no_match_returns_none(self):
        assert first_match([constant(None), constant("")], page("")) is None
        assert first_match([], page("")) is None

    def test_first_hit_reports_probe_name(self):
        hit = first_hit([constant(None), constant("value")], page(""))
        assert hit == ("value", "const:value")


class TestProbes:
    """Individual probe factories."""

    def test_control_label_reads_selected_option(self):
        html = '<select name="lang"><option value="cpp">C++</option><option value="py" selected>Python 3</option></select>'
        assert control_label('select[name="lang"]')(page(html)) == "Python 3"

    def test_control_label_defaults_to_first_option(self):
        html = '<select name="lang"><option value="cpp">C++</option><option value="py">Python 3</option></select>'
        assert control_label('select[name="lang"]')(page(html)) == "C++"

    def test_control_label_falls_back_to_data_lang(self):
        html = '<button class="lang-btn" data-lang="rust"></button>'
        assert control_label(".lang-btn")(page(html)) == "rust"

    def test_control_label_selects_only_ignores_other_tags(self):
        html = '<div class="lang">Java</div>'
        assert control_label(".lang", selects_only=True)(page(html)) is None

    def test_select_attribute_with_transform(self):
        html = '<div class="monaco-editor" data-mode-id="vs/languages/typescript"></div>'
        probe = select_attribute(".monaco-editor", "data-mode-id", transform=lambda v: v.split("/")[-1])
        assert probe(page(html)) == "typescript"

    def test_known_text_requires_exact_label(self):
        html = (
            '<div class="flex-row"><span>Python3 is great</span><button>Java</button></div>'
        )
        probe = known_text("button, span", ["Python3", "Java"], containers='div[class*="flex"]')
        assert probe(page(html)) == "Java"

    def test_known_text_scope_limits_search(self):
        html = (
            '<button>Go</button>'
            '<div class="editor-wrapper"><button>Rust</button></div>'
        )
        probe = known_text("button", ["Go", "Rust"], scope=(".editor-wrapper",))
        assert probe(page(html)) == "Rust"

    def test_labelled_known_text(self):
        html = '<div class="editor-toolbar">Language: Java</div><div class="pull-right">C++</div>'
        probe = labelled_known_text(".editor-toolbar, .pull-right", ["C++", "Java"])
        assert probe(page(html)) == "Java"

    def test_query_param(self):
        document = page("", url="https://www.hackerrank.com/challenges/x/problem?lang=kotlin")
        assert query_param("language", "lang")(document) == "kotlin"

    def test_editor_model_prefers_substantial_editor(self):
        document = page("", editors=["", "int main() { return 0; }"])
        assert editor_model(min_length=10)(document) == "int main() { return 0; }"
        assert editor_model()(document) == ""

    def test_editor_model_absent_without_live_state(self):
        assert editor_model()(page("<div class='monaco-editor'></div>")) is None

    def test_line_join_strips_trailing_whitespace(self):
        html = (
            '<div class="monaco-editor">'
            '<div class="view-line">def f():   </div>'
            '<div class="view-line">    return 1</div>'
            '</div>'
        )
        assert line_join(".monaco-editor", ".view-line")(page(html)) == "def f():\n    return 1"

    def test_line_join_missing_container(self):
        assert line_join(".monaco-editor", ".view-line")(page("<div class='view-line'>x</div>")) is None

    def test_inner_text_skips_hidden_elements(self):
        html = '<div class="dd"><span>Java</span><ul style="display: none"><li>C++</li></ul></div>'
        assert select_inner_text(".dd")(page(html)) == "Java"

    def test_substantial_text_prefers_long_description(self):
        long_text = "Print the sum of two integers read from standard input, one per line."
        html = f'<div class="challenge-body">Short</div><div class="challenge-text">{long_text}</div>'
        probe = substantial_text([".challenge-body", ".challenge-text"], min_length=50)
        assert probe(page(html)) == long_text

    def test_substantial_text_keeps_last_short_match(self):
        html = '<div class="a">Short one</div><div class="b">Short two</div>'
        assert substantial_text([".a", ".b"], min_length=50)(page(html)) == "Short two"

    def test_textarea_scan_skips_comment_boxes(self):
        html = (
            '<textarea class="comment-box">This is a long comment about the problem</textarea>'
            '<textarea class="editor">int main() { return 0; }</textarea>'
        )
        assert textarea_scan(min_length=20)(page(html)) == "int main() { return 0; }"
