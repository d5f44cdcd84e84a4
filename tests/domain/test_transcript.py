"""Tests for indospend.domain.transcript pure functions."""

from indospend.domain.transcript import SpokenExpense, parse_spoken_amount, parse_transcript


class TestParseTranscript:
    """Tests for parse_transcript."""

    def test_amount_then_description(self) -> None:
        """Should split a leading decimal amount from the description."""
        assert parse_transcript("12.50 coffee with friends") == SpokenExpense(12.5, "coffee with friends")

    def test_comma_grouped_amount(self) -> None:
        """Should drop thousands separators."""
        result = parse_transcript("1,250 rent payment")

        assert result.amount == 1250.0
        assert result.description == "rent payment"

    def test_spaces_inside_spoken_number(self) -> None:
        """Should join digits separated by spaces."""
        result = parse_transcript("1 250 rent")

        assert result.amount == 1250.0
        assert result.description == "rent"

    def test_no_leading_number(self) -> None:
        """Should default to 0.0 and keep the whole transcript."""
        result = parse_transcript("groceries")

        assert result.amount == 0.0
        assert result.description == "groceries"

    def test_number_later_in_transcript_is_description(self) -> None:
        """Should only read the amount from the start of the transcript."""
        result = parse_transcript("taxi 15")

        assert result.amount == 0.0
        assert result.description == "taxi 15"

    def test_amount_only(self) -> None:
        """Should allow an empty description."""
        result = parse_transcript("42")

        assert result.amount == 42.0
        assert result.description == ""

    def test_empty_transcript(self) -> None:
        """Should handle empty input."""
        assert parse_transcript("") == SpokenExpense(0.0, "")

    def test_unparsable_amount_region(self) -> None:
        """Should default to 0.0 when the leading run is not a number."""
        result = parse_transcript("1.2.3 snacks")

        assert result.amount == 0.0
        assert result.description == "snacks"

    def test_description_is_trimmed(self) -> None:
        """Should trim surrounding whitespace from the description."""
        result = parse_transcript("  8   lunch  ")

        assert result.amount == 8.0
        assert result.description == "lunch"

    def test_repeated_parse_is_stable(self) -> None:
        """Should return identical results for identical input."""
        assert parse_transcript("3.20 bus") == parse_transcript("3.20 bus")


class TestMultiLineTranscript:
    """Tests for transcripts spanning several lines."""

    def test_amount_before_line_break(self) -> None:
        """Should read the first word as the amount and keep the other lines."""
        result = parse_transcript("12 coffee\nwith team")

        assert result.amount == 12.0
        assert result.description == "coffee\nwith team"

    def test_amount_on_its_own_line(self) -> None:
        """Should split on the newline after the amount."""
        result = parse_transcript("1,250\nrent\npayment")

        assert result.amount == 1250.0
        assert result.description == "rent\npayment"

    def test_no_leading_number(self) -> None:
        """Should default to 0.0 and keep every line."""
        result = parse_transcript("groceries\nmilk")

        assert result.amount == 0.0
        assert result.description == "groceries\nmilk"

    def test_non_numeric_word_is_not_an_amount(self) -> None:
        """Should not read words such as 'nan' as an amount."""
        result = parse_transcript("nan bread\nand jam")

        assert result.amount == 0.0
        assert result.description == "nan bread\nand jam"

    def test_trailing_newline_uses_single_line_parse(self) -> None:
        """Should treat a single line ending in a newline as one line."""
        assert parse_transcript("8 lunch\n") == SpokenExpense(8.0, "lunch")


class TestParseSpokenAmount:
    """Tests for parse_spoken_amount."""

    def test_strips_commas_and_whitespace(self) -> None:
        """Should remove separators before parsing."""
        assert parse_spoken_amount(" 1, 000 .5 ") == 1000.5

    def test_empty_is_zero(self) -> None:
        """Should return 0.0 for an empty region."""
        assert parse_spoken_amount("") == 0.0

    def test_only_punctuation_is_zero(self) -> None:
        """Should return 0.0 when nothing numeric remains."""
        assert parse_spoken_amount(", . ,") == 0.0
