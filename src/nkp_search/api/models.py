from typing import Optional, Literal
from pydantic import BaseModel, Field

from nkp_search.api import config
from nkp_search.search.criteria import SearchCriteria


class SearchRequest(BaseModel):
    criteria: SearchCriteria = Field(default_factory=SearchCriteria)
    sort_column: Optional[Literal["decision_no", "case_no", "title", "decision_date", "ijlas_name"]] = None
    sort_direction: Literal["asc", "desc"] = "asc"
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=config.DEFAULT_PAGE_SIZE, ge=1, le=config.MAX_PAGE_SIZE)
    lang: Optional[Literal["ne", "en"]] = None
