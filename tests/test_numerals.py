import pytest

from nkp_search.numerals import (
    BSDate,
    ascii_to_devanagari,
    date_key,
    digits_to_ascii,
    parse_bs_date,
    parse_int,
    roman_to_int,
)


class TestDigits:

    @pytest.mark.parametrize("s", ["0", "7", "2079", "1234567890", "007"])
    def test_devanagari_round_trip(self, s):
        assert digits_to_ascii(ascii_to_devanagari(s)) == s

    @pytest.mark.parametrize("s", ["2079", "12", ""])
    def test_idempotent_on_ascii(self, s):
        assert digits_to_ascii(s) == s

    def test_mixed_and_unrecognized_pass_through(self):
        assert digits_to_ascii("२०७९.०३.१५") == "2079.03.15"
        assert digits_to_ascii("भाग ६४") == "भाग 64"
        assert digits_to_ascii("abc") == "abc"

    def test_empty_and_none(self):
        assert digits_to_ascii(None) == ""
        assert digits_to_ascii("") == ""

    def test_parse_int_behaves_like_parseint(self):
        assert parse_int("१४") == 14
        assert parse_int(" 07 ") == 7
        assert parse_int("12abc") == 12
        assert parse_int("abc") is None
        assert parse_int("") is None
        assert parse_int(None) is None


class TestRoman:

    @pytest.mark.parametrize("roman,expected", [
        ("I", 1), ("IV", 4), ("IX", 9), ("XIV", 14), ("XL", 40),
        ("XC", 90), ("CD", 400), ("MCMXCIX", 1999), ("MMXXIV", 2024),
    ])
    def test_known_values(self, roman, expected):
        assert roman_to_int(roman) == expected

    def test_case_insensitive_and_trimmed(self):
        assert roman_to_int(" xiv ") == 14

    @pytest.mark.parametrize("bad", ["", "   ", "ABC123", "14", "X I V", None])
    def test_invalid_returns_none(self, bad):
        assert roman_to_int(bad) is None


class TestBSDates:

    @pytest.mark.parametrize("text", [
        "२०७९.०३.१५", "2079-03-15", "2079/3/15", "2079 03 15", "२०७९/३/१५", " 2079.3.15 ",
    ])
    def test_separators_and_numerals(self, text):
        assert parse_bs_date(text) == BSDate(2079, 3, 15)

    @pytest.mark.parametrize("text", [
        "", "unknown", "2079-03", "2079-03-15-01", "1800-01-01", "2079-13-01", "2079-01-33", "2079-00-10",
    ])
    def test_malformed_returns_none(self, text):
        assert parse_bs_date(text) is None

    def test_date_key_ordering(self):
        assert date_key(2079, 3, 15) < date_key(2079, 3, 16) < date_key(2079, 4, 1) < date_key(2080, 1, 1)

    def test_date_key_value(self):
        assert date_key(2079, 3, 15) == 20790315
        assert BSDate(2079, 3, 15).key() == 20790315

    @pytest.mark.parametrize("parts", [
        (None, 1, 1), (2079, None, 1), (2079, 1, None), (2079, 13, 1), (2079, 1, 0), (1899, 1, 1), (2079.5, 1, 1),
    ])
    def test_date_key_rejects(self, parts):
        assert date_key(*parts) is None
