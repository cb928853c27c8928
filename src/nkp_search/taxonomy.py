"""Case taxonomy for the search form's dependent dropdowns.

Loads the versioned YAML taxonomy and provides lookup helpers:
 - load_taxonomy() -> Taxonomy (case types -> case names, bench and verdict labels)
 - find_category(tax, label) -> CaseCategory | None
 - find_case_name(tax, label, category) -> CaseName | None

The dataset stores ids (``mudda_type_value``, ``mudda_name_value``) while the
form submits display labels, so labels are translated back to ids here.
"""
from __future__ import annotations

import os
import json
import logging
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
TAXONOMY_PATH = os.getenv("TAXONOMY_PATH", os.path.join(PROJECT_ROOT, "taxonomy", "mudda_v1.yml"))


class CaseName(BaseModel):
    label: str
    value: Union[str, int]


class CaseCategory(BaseModel):
    label: str
    value: Union[str, int]
    names: List[CaseName] = Field(default_factory=list)


class Taxonomy(BaseModel):
    version: str = "fallback"
    categories: List[CaseCategory] = Field(default_factory=list)
    benches: List[str] = Field(default_factory=list)
    verdicts: List[str] = Field(default_factory=list)


DEFAULT_CATEGORIES = [
    'दुनियाबादी देवानी', 'सरकारबादी देवानी', 'दुनियावादी फौजदारी', 'सरकारवादी फौजदारी',
    'रिट', 'निवेदन', 'विविध',
]

DEFAULT_BENCHES = [
    'सिङ्गल बेञ्च इजलास', 'एक न्यायाधीशको इजलास', 'फूल बेन्च इजलास', 'डिभिजन वेन्च इजलास',
    'स्पेशल बेञ्च इजलास', 'तीन न्यायाधीशको इजलास', 'एकल इजलास', 'संयुक्त इजलास',
    'पूर्ण इजलास', 'विशेष इजलास', 'वृहद पूर्ण इजलास',
]

DEFAULT_VERDICTS = [
    'जारी', 'खारेज', 'सदर', 'उल्टी', 'बदर', '१८८ को राय बदर', 'केही उल्टी', 'अन्य', 'विविध',
    'सुरू सदर', 'पुनरावेदन अदालतमा फिर्ता', 'सुरू जिल्ला अदालतमा फिर्ता', 'निर्देशन जारी',
    'सुरू कार्यालयमा पठाउने', 'रूलिङ कायम', 'डिभिजन वेञ्चमा पेस गर्नु',
]


def _default_fallback_taxonomy() -> Taxonomy:
    """Case types without case names, plus the fixed bench/verdict labels.

    Used when the YAML file is missing or unreadable so searches on the
    remaining fields keep working.
    """
    return Taxonomy(
        version="fallback",
        categories=[CaseCategory(label=lbl, value=str(i + 1)) for i, lbl in enumerate(DEFAULT_CATEGORIES)],
        benches=list(DEFAULT_BENCHES),
        verdicts=list(DEFAULT_VERDICTS),
    )


@lru_cache(maxsize=4)
def load_taxonomy(path: Optional[str] = None) -> Taxonomy:
    path = path or TAXONOMY_PATH
    if not os.path.exists(path):
        logger.warning(f"Taxonomy file not found at {path}; using fallback taxonomy")
        return _default_fallback_taxonomy()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        if not data:
            return _default_fallback_taxonomy()
        return Taxonomy(**data)
    except (OSError, yaml.YAMLError, ValidationError, TypeError) as e:
        logger.warning(f"Failed to load taxonomy from {path}: {e}; using fallback taxonomy")
        return _default_fallback_taxonomy()


def as_taxonomy(data: Union[Taxonomy, Iterable[Dict[str, Any]], None]) -> Taxonomy:
    """Accept a Taxonomy or a bare list of ``{label, value, names}`` entries."""
    if data is None:
        return load_taxonomy()
    if isinstance(data, Taxonomy):
        return data
    return Taxonomy(categories=[CaseCategory(**entry) for entry in data])


def find_category(taxonomy: Taxonomy, label: Optional[str]) -> Optional[CaseCategory]:
    label = (label or "").strip()
    if not label:
        return None
    for cat in taxonomy.categories:
        if cat.label == label:
            return cat
    return None


def find_case_name(taxonomy: Taxonomy, label: Optional[str],
                   category: Optional[CaseCategory] = None) -> Optional[CaseName]:
    """Resolve a case-name label, inside ``category`` when one is selected.

    Without a category the label must identify a single id across all case
    types; ambiguous labels resolve to None.
    """
    label = (label or "").strip()
    if not label:
        return None
    if category is not None:
        return next((n for n in category.names if n.label == label), None)
    found = [n for cat in taxonomy.categories for n in cat.names if n.label == label]
    if len({str(n.value) for n in found}) == 1:
        return found[0]
    if found:
        logger.debug(f"Case name {label!r} is ambiguous across case types; ignoring")
    return None


def taxonomy_metadata(taxonomy: Optional[Taxonomy] = None) -> Dict[str, Any]:
    tax = taxonomy or load_taxonomy()
    return {
        'version': tax.version,
        'num_categories': len(tax.categories),
        'num_case_names': sum(len(c.names) for c in tax.categories),
        'num_benches': len(tax.benches),
        'num_verdicts': len(tax.verdicts),
    }


if __name__ == '__main__':  # manual quick check
    print(json.dumps(taxonomy_metadata(), indent=2, ensure_ascii=False))
