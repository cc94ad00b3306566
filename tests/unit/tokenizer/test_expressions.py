"""Tests for quote-aware expression and container helpers."""

from __future__ import annotations

from i18n_harvest.tokenizer import (
    ExpressionSpan,
    expression_spans,
    extract_container,
    find_container,
    find_expression_end,
    replace_expressions,
)


class TestFindExpressionEnd:
    """Brace counting that ignores braces inside string literals."""

    def test_simple_expression(self) -> None:
        """Test that a plain expression ends after its closing delimiter."""
        text = "{{ name }} rest"

        assert find_expression_end(text, 0) == len("{{ name }}")

    def test_brace_inside_string_literal(self) -> None:
        """Test that a quoted closing brace does not end the expression."""
        text = "{{ a ? '}' : 'x' }}"

        assert find_expression_end(text, 0) == len(text)

    def test_mismatched_quote_inside_other_quote(self) -> None:
        """Test that a double quote inside a single-quoted string is inert."""
        text = """{{ ok ? 'say "hi' : "it's" }}"""

        assert find_expression_end(text, 0) == len(text)

    def test_escaped_quote_keeps_string_open(self) -> None:
        """Test that a backslash-escaped quote does not close the string."""
        text = r"{{ 'it\'s }' }}"

        assert find_expression_end(text, 0) == len(text)

    def test_nested_object_literal(self) -> None:
        """Test that nested braces are balanced before the expression ends."""
        text = "{{ format({ count: n }) }}!"

        assert find_expression_end(text, 0) == len(text) - 1

    def test_unterminated(self) -> None:
        """Test that a missing closing delimiter yields None."""
        assert find_expression_end("{{ open ? '}}' : ", 0) is None


class TestExpressionSpans:
    """Span listing and replacement."""

    def test_spans_and_inner_source(self) -> None:
        """Test that the inner source excludes delimiters and outer whitespace."""
        text = "<div>{{ a ? '}' : 'x' }}</div>"

        spans = expression_spans(text)

        assert len(spans) == 1
        assert spans[0].inner(text) == "a ? '}' : 'x'"

    def test_multiple_spans(self) -> None:
        """Test that every expression is listed in order."""
        text = "Hello {{ user.name }}, you have {{ count }} messages"

        spans = expression_spans(text)

        assert [span.inner(text) for span in spans] == ["user.name", "count"]

    def test_stops_at_unterminated_expression(self) -> None:
        """Test that spans found before an unterminated expression are kept."""
        text = "{{ a }} and {{ b"

        assert expression_spans(text) == [ExpressionSpan(0, 7)]

    def test_replace_expressions(self) -> None:
        """Test that expressions are replaced without touching the surrounding text."""
        text = "Hello {{ user.name }}, you have {{ count }} messages"

        replaced = replace_expressions(text, lambda source: "{" + source.split(".")[-1] + "}")

        assert replaced == "Hello {name}, you have {count} messages"

    def test_replace_with_literal_brace(self) -> None:
        """Test that replacement handles expressions containing quoted braces."""
        text = "Status: {{ done ? '}' : '{' }} now"

        assert replace_expressions(text, lambda _source: "X") == "Status: X now"


class TestContainers:
    """Depth-tracked container extraction."""

    def test_nested_containers(self) -> None:
        """Test that nested same-name containers are balanced."""
        document = (
            "<template><div><template v-if=\"x\"><p>Inner</p></template>"
            "<p>Outer</p></div></template><script>const a = 1</script>"
        )

        inner = extract_container(document, "template")

        assert inner == (
            "<div><template v-if=\"x\"><p>Inner</p></template><p>Outer</p></div>"
        )

    def test_nested_containers_ignore_case(self) -> None:
        """Test that depth tracking matches open and close tags in any case."""
        document = (
            "<Template><div><TEMPLATE v-if=\"x\"><p>Inner</p></template>"
            "<p>Outer</p></div></Template><script>const a = 1</script>"
        )

        inner = extract_container(document, "template")

        assert inner == (
            "<div><TEMPLATE v-if=\"x\"><p>Inner</p></template><p>Outer</p></div>"
        )

    def test_longer_tag_name_not_counted(self) -> None:
        """Test that tags sharing the prefix do not change the depth."""
        document = "<template><templates-list>Items</templates-list></template>"

        inner = extract_container(document, "template")

        assert inner == "<templates-list>Items</templates-list>"

    def test_unbalanced_falls_back_to_last_close(self) -> None:
        """Test that a missing close tag falls back to a greedy match."""
        document = "<template><template><p>One</p></template>"

        span = find_container(document, "template")

        assert span is not None
        assert document[span.start : span.end] == "<template><p>One</p>"

    def test_missing_container(self) -> None:
        """Test that documents without the container return None."""
        assert find_container("<div>No template</div>", "template") is None
