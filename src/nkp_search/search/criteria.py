"""Search form criteria and their normalized, comparable form.

The form submits every field as a display string: numbers may be in
Devanagari digits, dropdowns send labels, names may be typed in Roman script.
``normalize_criteria`` turns that into integers, date keys, taxonomy ids and
(transliterated) search terms. Nothing in here raises on bad input; a field
that cannot be understood simply imposes no constraint.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from nkp_search.numerals import date_key, parse_int
from nkp_search.taxonomy import Taxonomy, as_taxonomy, find_case_name, find_category
from nkp_search.transliteration import safe_transliterate

logger = logging.getLogger(__name__)


class SearchCriteria(BaseModel):
    """Raw form values. Accepts the form's field names or the snake_case names."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_max_length=1000)

    case_no: str = Field(default="", alias="muddaNo")
    decision_no: str = Field(default="", alias="nirnayaNo")
    judge: str = Field(default="", alias="nyayadhish")
    case_type: str = Field(default="", alias="muddhakoKisim")
    bench: str = Field(default="", alias="ijalashkoNaam")
    verdict: str = Field(default="", alias="faisalakoKisim")
    case_name: str = Field(default="", alias="muddhakoNaam")
    petitioner: str = Field(default="", alias="pakshya")
    respondent: str = Field(default="", alias="vipakshya")
    date_from_year: str = Field(default="", alias="faisalaMitiFromYear")
    date_from_month: str = Field(default="", alias="faisalaMitiFromMonth")
    date_from_day: str = Field(default="", alias="faisalaMitiFromDay")
    date_to_year: str = Field(default="", alias="faisalaMitiToYear")
    date_to_month: str = Field(default="", alias="faisalaMitiToMonth")
    date_to_day: str = Field(default="", alias="faisalaMitiToDay")
    keyword: str = Field(default="", alias="shabdabata")
    nkp_volume: str = Field(default="", alias="nekapaBhag")
    nkp_year: str = Field(default="", alias="nekapaSaal")
    nkp_month: str = Field(default="", alias="nekapaMahina")
    nkp_issue: str = Field(default="", alias="nekapaAnka")

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_to_str(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


@dataclass(frozen=True)
class NormalizedCriteria:
    case_no: Optional[int] = None
    decision_no: Optional[int] = None
    nkp_volume: Optional[int] = None
    nkp_year: Optional[int] = None
    nkp_month: Optional[int] = None
    nkp_issue: Optional[int] = None
    case_type_value: Optional[str] = None
    case_name_value: Optional[str] = None
    bench: str = ""
    verdict: str = ""
    date_from: Optional[int] = None
    date_to: Optional[int] = None
    judge: str = ""
    petitioner: str = ""
    respondent: str = ""
    keyword: str = ""

    @property
    def has_date_range(self) -> bool:
        return self.date_from is not None or self.date_to is not None

    @property
    def free_text_terms(self) -> dict:
        return {
            "judge": self.judge,
            "petitioner": self.petitioner,
            "respondent": self.respondent,
            "keyword": self.keyword,
        }


def coerce_criteria(raw: Mapping[str, Any]) -> SearchCriteria:
    """Validate raw form values, dropping any field that fails validation.

    Over-long or non-text values impose no constraint instead of failing the
    whole search.
    """
    data = dict(raw)
    try:
        return SearchCriteria.model_validate(data)
    except ValidationError as e:
        bad = {str(err["loc"][0]) for err in e.errors() if err.get("loc")}
    for name, field in SearchCriteria.model_fields.items():
        keys = {name, field.alias}
        if keys & bad:
            for key in keys:
                if data.pop(key, None) is not None:
                    logger.warning(f"Ignoring invalid criterion {key!r}")
    try:
        return SearchCriteria.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Criteria still invalid after dropping fields: {e.error_count()} error(s); ignoring all")
        return SearchCriteria()


def _bound(year: str, month: str, day: str, side: str) -> Optional[int]:
    parts = (parse_int(year), parse_int(month), parse_int(day))
    if any(p is None for p in parts):
        if any((year, month, day)):
            logger.debug(f"Incomplete {side} date bound {year!r}/{month!r}/{day!r}; ignoring")
        return None
    key = date_key(*parts)
    if key is None:
        logger.debug(f"Implausible {side} date bound {parts}; ignoring")
    return key


def normalize_criteria(
    criteria: Union[SearchCriteria, Mapping[str, Any], None],
    taxonomy: Union[Taxonomy, list, None] = None,
    transliterate: Callable[[str], str] = safe_transliterate,
) -> NormalizedCriteria:
    if criteria is None:
        criteria = SearchCriteria()
    elif not isinstance(criteria, SearchCriteria):
        criteria = coerce_criteria(criteria)
    tax = as_taxonomy(taxonomy)

    category = find_category(tax, criteria.case_type)
    if criteria.case_type.strip() and category is None:
        logger.debug(f"Unknown case type label {criteria.case_type!r}; no constraint")
    case_name = find_case_name(tax, criteria.case_name, category)
    if criteria.case_name.strip() and case_name is None:
        logger.debug(f"Unresolved case name label {criteria.case_name!r}; no constraint")

    return NormalizedCriteria(
        case_no=parse_int(criteria.case_no),
        decision_no=parse_int(criteria.decision_no),
        nkp_volume=parse_int(criteria.nkp_volume),
        nkp_year=parse_int(criteria.nkp_year),
        nkp_month=parse_int(criteria.nkp_month),
        nkp_issue=parse_int(criteria.nkp_issue),
        case_type_value=str(category.value) if category is not None else None,
        case_name_value=str(case_name.value) if case_name is not None else None,
        bench=criteria.bench.strip(),
        verdict=criteria.verdict.strip(),
        date_from=_bound(criteria.date_from_year, criteria.date_from_month, criteria.date_from_day, "from"),
        date_to=_bound(criteria.date_to_year, criteria.date_to_month, criteria.date_to_day, "to"),
        judge=transliterate(criteria.judge),
        petitioner=transliterate(criteria.petitioner),
        respondent=transliterate(criteria.respondent),
        keyword=transliterate(criteria.keyword),
    )
