"""Tests for message template rendering."""

from decimal import Decimal
from fractions import Fraction

import pytest

from elapsed_time.templates import PropertyToken, TextToken, format_value, parse, render


class TestParse:
    """Test template tokenization."""

    def test_text_and_holes(self):
        """Test splitting text and named holes."""
        tokens = parse("Job {Id} took {Elapsed:0.0} ms")

        assert tokens == (
            TextToken("Job "),
            PropertyToken(name="Id", raw="{Id}"),
            TextToken(" took "),
            PropertyToken(name="Elapsed", raw="{Elapsed:0.0}", format="0.0"),
            TextToken(" ms"),
        )

    def test_escaped_braces(self):
        """Test that doubled braces are literal."""
        assert render("{{literal}} {Name}", ("x",)).text == "{literal} x"

    def test_capture_hints_are_stripped(self):
        """Test @ and $ prefixes."""
        rendered = render("{@Payload} {$Kind}", ({"a": 1}, "note"))

        assert rendered.properties == {"Payload": {"a": 1}, "Kind": "note"}

    def test_malformed_holes_kept_as_text(self):
        """Test that invalid holes are rendered verbatim."""
        assert render("{not valid} {Ok} {", ("v",)).text == "{not valid} v {"

    def test_alignment(self):
        """Test right and left alignment."""
        assert render("[{A,5}][{B,-5}]", ("x", "y")).text == "[    x][y    ]"


class TestBinding:
    """Test binding arguments to holes."""

    def test_named_holes_bind_in_order(self):
        """Test positional binding of named holes."""
        rendered = render("{First} then {Second}", (1, 2))

        assert rendered.text == "1 then 2"
        assert list(rendered.properties) == ["First", "Second"]

    def test_repeated_name_takes_one_argument_each(self):
        """Test that every occurrence of a name consumes its own argument."""
        rendered = render("{A} {B} {A}", ("a", "b", "c"))

        assert rendered.text == "a b c"
        assert rendered.properties == {"A_1": "a", "B": "b", "A": "c"}
        assert rendered.extra_args == ()

    def test_trailing_suffix_holes_keep_their_values(self):
        """Test that a caller hole named like the outcome suffix does not steal its value."""
        rendered = render(
            "Budget {Elapsed} ms {Outcome} in {Elapsed:0.0} ms",
            (500, "completed", 1234.0),
        )

        assert rendered.text == "Budget 500 ms completed in 1234.0 ms"
        assert rendered.properties["Elapsed"] == 1234.0
        assert rendered.properties["Elapsed_1"] == 500
        assert rendered.extra_args == ()

    def test_numeric_holes_bind_by_index(self):
        """Test indexed holes."""
        rendered = render("{1} before {0}", ("zero", "one"))

        assert rendered.text == "one before zero"
        assert rendered.properties == {"1": "one", "0": "zero"}

    def test_missing_values_render_raw(self):
        """Test that unbound holes stay visible."""
        rendered = render("{A} and {B}", ("only",))

        assert rendered.text == "only and {B}"
        assert "B" not in rendered.properties

    def test_extra_args_reported(self):
        """Test surplus arguments."""
        assert render("{A}", (1, 2, 3)).extra_args == (2, 3)

    def test_operation_template(self):
        """Test the shape produced by a finished operation."""
        rendered = render(
            "Job {Id} {Outcome} in {Elapsed:0.0} ms", (42, "completed", 1000.26)
        )

        assert rendered.text == "Job 42 completed in 1000.3 ms"
        assert rendered.properties["Elapsed"] == 1000.26


class TestFormatValue:
    """Test format specifiers."""

    @pytest.mark.parametrize(
        ("value", "fmt", "expected"),
        [
            (1000.0, "0.0", "1000.0"),
            (0.04, "0.0", "0.0"),
            (12.3456, "0.00", "12.35"),
            (7, "0", "7"),
            (3.5, "00.0", "03.5"),
            (Decimal("12.3456"), "0.00", "12.35"),
            (Decimal("2"), "0.0", "2.0"),
            (Fraction(1, 4), "0.00", "0.25"),
            (0.5, ".2f", "0.50"),
            (255, "x", "ff"),
        ],
    )
    def test_numeric_formats(self, value, fmt, expected):
        """Test fixed-point and Python format specifiers."""
        assert format_value(value, fmt) == expected

    def test_fixed_point_on_non_number(self):
        """Test that non-numbers ignore numeric formats."""
        assert format_value("text", "0.0") == "text"
        assert format_value(True, "0.0") == "True"

    def test_invalid_python_spec_falls_back_to_str(self):
        """Test values that reject a specifier."""
        assert format_value("text", "d") == "text"

    def test_no_format(self):
        """Test plain rendering."""
        assert format_value(None, None) == "None"
