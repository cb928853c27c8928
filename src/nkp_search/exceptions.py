"""Errors surfaced to callers of the search engine.

Only dataset-level failures propagate. Per-field problems (bad numerals,
unparseable dates, unknown labels, failed transliteration) are absorbed
inside the engine.
"""
from __future__ import annotations

from typing import Dict, Optional


class SearchDataError(RuntimeError):
    """Base class for fatal dataset problems."""

    code = "search_data_error"
    messages: Dict[str, str] = {
        "ne": "खोज डाटा प्रशोधन गर्न असफल भयो।",
        "en": "Failed to process the search data.",
    }

    def __init__(self, detail: str, reason: Optional[str] = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.reason = reason

    def user_message(self, lang: str = "ne") -> str:
        return self.messages.get(lang) or self.messages["ne"]


class DataUnavailable(SearchDataError):
    """The CSV resource could not be fetched or read, or it was empty."""

    code = "data_unavailable"
    messages = {
        "ne": "खोज डाटा फाइल लोड गर्न असमर्थ भयौं। कृपया पछि फेरि प्रयास गर्नुहोस् वा प्रशासकलाई सम्पर्क गर्नुहोस्।",
        "en": "Unable to load the search data file. Please try again later or contact the administrator.",
    }

    def __init__(self, detail: str, reason: Optional[str] = None, status: Optional[int] = None) -> None:
        super().__init__(detail, reason)
        self.status = status


class DataCorrupt(SearchDataError):
    """The CSV was readable but structurally unparseable."""

    code = "data_corrupt"
    messages = {
        "ne": "डाटा फाइल प्रशोधन गर्दा गम्भीर त्रुटि भयो। फाइलको संरचना जाँच्नुहोस्।",
        "en": "A serious error occurred while processing the data file. Check the file structure.",
    }


__all__ = ["SearchDataError", "DataUnavailable", "DataCorrupt"]
