"""
Unit tests for the CML line classifier.
"""

from cml_php.parser.lexer import Line, LineKind, classify, strip_comment, tokenize_lines


class TestStripComment:
    """Test `//` comment removal."""

    def test_trailing_comment_removed(self):
        assert strip_comment("String name // the name") == "String name"

    def test_full_line_comment_is_empty(self):
        assert strip_comment("   // nothing here") == ""

    def test_no_comment_only_trims(self):
        assert strip_comment("  Long id  ") == "Long id"


class TestClassify:
    """Test keyword recognition."""

    def test_opening_keywords(self):
        assert classify("BoundedContext Sales {") is LineKind.BOUNDED_CONTEXT
        assert classify("Aggregate Order {") is LineKind.AGGREGATE
        assert classify("Entity Order {") is LineKind.ENTITY
        assert classify("ValueObject Money {") is LineKind.VALUE_OBJECT
        assert classify("enum Status {") is LineKind.ENUM

    def test_keyword_must_be_followed_by_whitespace(self):
        assert classify("EntityId id") is LineKind.OTHER
        assert classify("enumeration values") is LineKind.OTHER

    def test_aggregate_root_marker(self):
        assert classify("aggregateRoot") is LineKind.AGGREGATE_ROOT

    def test_closing_lines(self):
        assert classify("}") is LineKind.CLOSE
        assert classify("String name }") is LineKind.CLOSE

    def test_property_line_is_other(self):
        assert classify("- Set<OrderLine> lines") is LineKind.OTHER

    def test_other_blocks(self):
        assert classify("Service OrderService {") is LineKind.BLOCK
        assert classify("Repository CustomerRepository {") is LineKind.BLOCK
        assert classify("ContextMap {") is LineKind.BLOCK
        assert classify("DomainEvent OrderPlaced { String orderId }") is LineKind.BLOCK

    def test_bare_braces_are_not_blocks(self):
        assert classify("{") is LineKind.OTHER
        assert classify("{ A, B }") is LineKind.CLOSE


class TestLine:
    """Test Line helpers."""

    def test_declared_name(self):
        line = Line(1, "BoundedContext Sales implements SalesDomain {", LineKind.BOUNDED_CONTEXT)
        assert line.declared_name() == "Sales"

    def test_missing_name_is_empty(self):
        line = Line(1, "Entity {", LineKind.ENTITY)
        assert line.declared_name() == ""

    def test_inline_body(self):
        line = Line(1, "enum Status { A, B }", LineKind.ENUM)
        assert line.opens_scope
        assert line.closes_scope
        assert line.inline_body() == "A, B"

    def test_inline_body_absent_without_brace(self):
        line = Line(1, "Entity Order", LineKind.ENTITY)
        assert line.inline_body() is None

    def test_open_brace_line_does_not_close(self):
        line = Line(1, "Entity Order {", LineKind.ENTITY)
        assert line.opens_scope
        assert not line.closes_scope

    def test_block_line_opens_scope(self):
        line = Line(1, "Service OrderService {", LineKind.BLOCK)
        assert line.opens_scope
        assert not line.closes_scope
        assert line.declared_name() == ""


class TestTokenizeLines:
    """Test splitting raw text into classified lines."""

    def test_blank_and_comment_lines_dropped(self):
        content = "// header\n\nBoundedContext Sales {\n\n  // inner\n}\n"
        lines = tokenize_lines(content)

        assert [l.text for l in lines] == ["BoundedContext Sales {", "}"]

    def test_source_line_numbers_kept(self):
        lines = tokenize_lines("\n\nEntity A {\n  String x\n}")

        assert [l.number for l in lines] == [3, 4, 5]
        assert [l.kind for l in lines] == [LineKind.ENTITY, LineKind.OTHER, LineKind.CLOSE]

    def test_empty_content(self):
        assert tokenize_lines("") == []
