"""
Tests for the template scanner state machine.

This module tests the structural events emitted for tags, attributes,
text runs and expressions, plus the behavior on malformed input.
"""

from __future__ import annotations

from i18n_harvest.tokenizer import (
    Attribute,
    Expression,
    TagClose,
    TagOpen,
    TemplateScanner,
    TextRun,
    scan,
)


def _texts(template: str) -> list[TextRun]:
    return [event for event in scan(template) if isinstance(event, TextRun)]


class TestTemplateScanner:
    """Event stream for well-formed templates."""

    def test_tags_and_text(self) -> None:
        """Test the basic open/text/close sequence."""
        events = scan("<p>Hello world</p>")

        assert isinstance(events[0], TagOpen)
        assert events[0].name == "p"
        assert isinstance(events[1], TextRun)
        assert events[1].text == "Hello world"
        assert events[1].parent == "p"
        assert isinstance(events[2], TagClose)
        assert events[2].name == "p"

    def test_quote_aware_expression(self) -> None:
        """Test that a quoted closing brace stays inside the expression."""
        events = scan("<div>{{ a ? '}' : 'x' }}</div>")

        expressions = [event for event in events if isinstance(event, Expression)]
        assert len(expressions) == 1
        assert expressions[0].source == "a ? '}' : 'x'"
        assert expressions[0].parent == "div"

    def test_text_run_records_expression_spans(self) -> None:
        """Test that text runs carry the spans of their embedded expressions."""
        runs = _texts("<p>Hi {{ user.name }}!</p>")

        assert len(runs) == 1
        run = runs[0]
        assert [span.inner(run.text) for span in run.expressions] == ["user.name"]

    def test_attributes(self) -> None:
        """Test quoted, unquoted, boolean and directive attributes."""
        events = scan('<input type=text placeholder="Your name" disabled :title="label">')

        attributes = [event for event in events if isinstance(event, Attribute)]
        assert [(a.name, a.value) for a in attributes] == [
            ("type", "text"),
            ("placeholder", "Your name"),
            ("disabled", None),
            (":title", "label"),
        ]
        assert all(a.tag == "input" for a in attributes)
        assert attributes[1].quote == '"'
        assert attributes[0].quote == ""

    def test_attribute_value_with_expression(self) -> None:
        """Test that a quote inside an expression does not end the attribute value."""
        events = scan("""<img alt="{{ ok ? "Photo" : 'None' }}">""")

        attributes = [event for event in events if isinstance(event, Attribute)]
        assert len(attributes) == 1
        assert attributes[0].value == """{{ ok ? "Photo" : 'None' }}"""

    def test_nesting_sets_parent(self) -> None:
        """Test that the nearest open tag becomes the parent of text."""
        runs = _texts("<section><h2>Title text</h2>Trailing words</section>")

        assert [(run.text, run.parent) for run in runs] == [
            ("Title text", "h2"),
            ("Trailing words", "section"),
        ]

    def test_void_elements_do_not_nest(self) -> None:
        """Test that text after a void element belongs to the enclosing tag."""
        runs = _texts("<p>First<br>Second line</p>")

        assert [run.parent for run in runs] == ["p", "p"]

    def test_self_closing_tag(self) -> None:
        """Test that self-closing tags are flagged and never become parents."""
        events = scan("<div><Icon name=\"x\"/>Label text</div>")

        opens = [event for event in events if isinstance(event, TagOpen)]
        assert opens[1].name == "Icon"
        assert opens[1].self_closing is True
        assert _texts("<div><Icon/>Label text</div>")[0].parent == "div"

    def test_comments_skipped(self) -> None:
        """Test that comment contents never appear as text."""
        runs = _texts("<p><!-- hidden note -->Visible text</p>")

        assert [run.text for run in runs] == ["Visible text"]

    def test_verbatim_blocks_skipped(self) -> None:
        """Test that script and style contents are not tokenized as text."""
        runs = _texts(
            "<div>Before</div><script>const x = '<p>Not text</p>'</script>"
            "<style>.a { color: red }</style><div>After</div>"
        )

        assert [run.text for run in runs] == ["Before", "After"]

    def test_trailing_text_flushed(self) -> None:
        """Test that text at the end of input is emitted."""
        runs = _texts("<b>Bold</b> and trailing text")

        assert runs[-1].text == " and trailing text"
        assert runs[-1].parent is None

    def test_stray_less_than_is_text(self) -> None:
        """Test that a lone less-than sign does not open a tag."""
        runs = _texts("<p>1 < 2 is true</p>")

        assert runs[0].text == "1 < 2 is true"

    def test_scanner_is_reusable(self) -> None:
        """Test that one scanner instance starts clean on each scan."""
        scanner = TemplateScanner()

        first = scanner.scan("<p>One</p>")
        second = scanner.scan("<p>Two</p>")

        assert len(first) == len(second) == 3
        assert isinstance(second[1], TextRun)
        assert second[1].text == "Two"


class TestMalformedInput:
    """Malformed templates never raise."""

    def test_unterminated_expression_keeps_prior_events(self) -> None:
        """Test that scanning stops at an unterminated expression."""
        events = scan("<p>Before</p><p>Broken {{ value <span>x</span>")

        runs = [event for event in events if isinstance(event, TextRun)]
        assert runs[0].text == "Before"
        assert runs[-1].text == "Broken "
        assert not any(isinstance(event, TagOpen) and event.name == "span" for event in events)

    def test_unclosed_tag_at_end(self) -> None:
        """Test that input ending inside a tag yields the events before it."""
        events = scan("<p>Done</p><div class=\"x")

        assert [type(event) for event in events] == [TagOpen, TextRun, TagClose]

    def test_unterminated_script_block(self) -> None:
        """Test that an unterminated verbatim block stops the scan."""
        events = scan("<p>Shown</p><script>let a = 1;")

        assert [event.text for event in events if isinstance(event, TextRun)] == ["Shown"]
