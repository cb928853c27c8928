from nkp_search.search.fuzzy import (
    JUDGE_KEYS,
    PETITIONER_KEYS,
    FuzzyOptions,
    apply_fuzzy_stages,
    field_distance,
    fuzzy_filter,
    options_from,
    score_row,
)


def test_exact_substring_has_zero_distance():
    assert field_distance("smith", "John Smith Jr", FuzzyOptions()) == 0.0


def test_missing_or_blank_value_is_max_distance():
    assert field_distance("smith", None, FuzzyOptions()) == 1.0
    assert field_distance("smith", "   ", FuzzyOptions()) == 1.0


def test_better_match_ranks_first():
    rows = [{"judges": "john smyth"}, {"judges": "john smith"}, {"judges": "jane doe"}]
    out = fuzzy_filter("John Smith", rows, JUDGE_KEYS)
    assert out == [{"judges": "john smith"}, {"judges": "john smyth"}]


def test_short_term_is_no_constraint():
    rows = [{"judges": "a"}, {"judges": "b"}]
    assert fuzzy_filter("jo", rows, JUDGE_KEYS) is rows
    assert fuzzy_filter("", rows, JUDGE_KEYS) is rows
    assert fuzzy_filter(None, rows, JUDGE_KEYS) is rows


def test_heavier_column_match_scores_lower():
    opts = FuzzyOptions()
    title_only = score_row("ram thapa", {"title": "ram thapa"}, PETITIONER_KEYS, opts)
    petitioner = score_row("ram thapa", {"petitioner": "ram thapa"}, PETITIONER_KEYS, opts)
    assert petitioner < title_only
    rows = [{"title": "ram thapa"}, {"petitioner": "ram thapa"}]
    assert fuzzy_filter("ram thapa", rows, PETITIONER_KEYS) == [rows[1], rows[0]]


def test_no_matching_column_scores_none():
    assert score_row("ram thapa", {"petitioner": "zzzz"}, PETITIONER_KEYS, FuzzyOptions()) is None


def test_location_window_when_not_ignored():
    value = "x" * 200 + "john smith"
    assert field_distance("john smith", value, FuzzyOptions()) == 0.0
    near = FuzzyOptions(ignore_location=False, distance=10)
    assert field_distance("john smith", value, near) == 1.0


def test_stages_combine_as_and():
    rows = [
        {"judges": "john smith", "petitioner": "alice cooper"},
        {"judges": "john smith", "petitioner": "bob dylan"},
        {"judges": "peter brown", "petitioner": "alice cooper"},
    ]
    out = apply_fuzzy_stages(rows, {"judge": "john smith", "petitioner": "alice cooper"})
    assert out == [rows[0]]


def test_stages_without_terms_keep_order():
    rows = [{"judges": "b"}, {"judges": "a"}]
    assert apply_fuzzy_stages(rows, {}) == rows


def test_options_from_overrides():
    opts = options_from(threshold=0.2)
    assert opts.threshold == 0.2
    assert opts.distance == FuzzyOptions().distance
    assert options_from() == FuzzyOptions()
