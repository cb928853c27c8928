import pytest

from nkp_search.search.criteria import NormalizedCriteria, SearchCriteria, normalize_criteria


def _identity(text):
    return (text or "").strip()


def test_form_aliases_and_snake_case():
    a = SearchCriteria.model_validate({"muddaNo": "१४", "nyayadhish": "हरि"})
    b = SearchCriteria(case_no="१४", judge="हरि")
    assert a == b


def test_numbers_and_none_are_coerced():
    c = SearchCriteria.model_validate({"muddaNo": 14, "nekapaBhag": None, "unknownField": "x"})
    assert c.case_no == "14"
    assert c.nkp_volume == ""


def test_empty_criteria_impose_nothing(taxonomy):
    n = normalize_criteria({}, taxonomy, transliterate=_identity)
    assert n == NormalizedCriteria()
    assert not n.has_date_range


def test_numeric_fields(taxonomy):
    n = normalize_criteria({
        "muddaNo": "१४", "nirnayaNo": "123", "nekapaBhag": "६४",
        "nekapaSaal": "२०७९", "nekapaMahina": "abc", "nekapaAnka": " ५ ",
    }, taxonomy, transliterate=_identity)
    assert (n.case_no, n.decision_no, n.nkp_volume, n.nkp_year) == (14, 123, 64, 2079)
    assert n.nkp_month is None
    assert n.nkp_issue == 5


def test_labels_resolve_to_ids(taxonomy):
    n = normalize_criteria({"muddhakoKisim": "रिट", "muddhakoNaam": "उत्प्रेषण"}, taxonomy, transliterate=_identity)
    assert n.case_type_value == "5"
    assert n.case_name_value == "501"


def test_case_name_without_type(taxonomy):
    n = normalize_criteria({"muddhakoNaam": "अंश"}, taxonomy, transliterate=_identity)
    assert n.case_type_value is None
    assert n.case_name_value == "101"


def test_case_name_outside_selected_type(taxonomy):
    n = normalize_criteria({"muddhakoKisim": "रिट", "muddhakoNaam": "अंश"}, taxonomy, transliterate=_identity)
    assert n.case_type_value == "5"
    assert n.case_name_value is None


def test_unknown_labels_impose_nothing(taxonomy):
    n = normalize_criteria({"muddhakoKisim": "अज्ञात", "muddhakoNaam": "दर्ता बदर"}, taxonomy, transliterate=_identity)
    assert n.case_type_value is None
    assert n.case_name_value is None


def test_bench_and_verdict_are_trimmed(taxonomy):
    n = normalize_criteria({"ijalashkoNaam": " संयुक्त इजलास ", "faisalakoKisim": "सदर"}, taxonomy, transliterate=_identity)
    assert n.bench == "संयुक्त इजलास"
    assert n.verdict == "सदर"


def test_date_bounds(taxonomy):
    n = normalize_criteria({
        "faisalaMitiFromYear": "२०७९", "faisalaMitiFromMonth": "१", "faisalaMitiFromDay": "१",
        "faisalaMitiToYear": "2079", "faisalaMitiToMonth": "12", "faisalaMitiToDay": "30",
    }, taxonomy, transliterate=_identity)
    assert n.date_from == 20790101
    assert n.date_to == 20791230
    assert n.has_date_range


@pytest.mark.parametrize("year,month,day", [("2079", "", "1"), ("2079", "13", "1"), ("abc", "1", "1")])
def test_incomplete_or_implausible_bound_is_ignored(taxonomy, year, month, day):
    n = normalize_criteria({
        "faisalaMitiFromYear": year, "faisalaMitiFromMonth": month, "faisalaMitiFromDay": day,
    }, taxonomy, transliterate=_identity)
    assert n.date_from is None
    assert not n.has_date_range


def test_free_text_goes_through_transliterator(taxonomy):
    seen = []

    def fake(text):
        seen.append(text)
        return f"<{text}>"

    n = normalize_criteria({"nyayadhish": "hari", "pakshya": "ram", "vipakshya": "", "shabdabata": "jagga"},
                           taxonomy, transliterate=fake)
    assert n.free_text_terms == {"judge": "<hari>", "petitioner": "<ram>", "respondent": "<>", "keyword": "<jagga>"}
    assert seen == ["hari", "ram", "", "jagga"]


def test_accepts_model_instance(taxonomy):
    n = normalize_criteria(SearchCriteria(case_no="XIV"), taxonomy, transliterate=_identity)
    assert n.case_no is None


def test_overlong_field_is_dropped_not_raised(taxonomy):
    n = normalize_criteria({"shabdabata": "राम " * 300, "muddaNo": "१४"}, taxonomy, transliterate=_identity)
    assert n.keyword == ""
    assert n.case_no == 14


def test_non_text_field_is_dropped(taxonomy):
    n = normalize_criteria({"nyayadhish": ["हरि"], "nekapaBhag": {"x": 1}, "ijalashkoNaam": "एकल इजलास"},
                           taxonomy, transliterate=_identity)
    assert n.judge == ""
    assert n.nkp_volume is None
    assert n.bench == "एकल इजलास"
