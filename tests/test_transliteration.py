from nkp_search.transliteration import contains_devanagari, safe_transliterate, to_devanagari


def test_empty_input():
    assert safe_transliterate("") == ""
    assert safe_transliterate(None) == ""


def test_short_input_is_trimmed_not_transliterated():
    assert safe_transliterate("  ab ") == "ab"


def test_devanagari_input_is_kept():
    assert safe_transliterate(" राम बहादुर ") == "राम बहादुर"


def test_roman_input_becomes_devanagari():
    out = safe_transliterate("ram")
    assert contains_devanagari(out)
    assert out == to_devanagari("ram")


def test_no_trailing_halanta():
    assert not to_devanagari("ram").endswith("्")
    assert not to_devanagari("ram bahadur").split()[0].endswith("्")


def test_failing_transliterator_falls_back():
    def boom(text):
        raise RuntimeError("no scheme")

    assert safe_transliterate(" kamala ", transliterator=boom) == "kamala"


def test_blank_output_falls_back():
    assert safe_transliterate("kamala", transliterator=lambda t: "  ") == "kamala"


def test_min_length_is_configurable():
    assert safe_transliterate("ram", min_length=5) == "ram"
