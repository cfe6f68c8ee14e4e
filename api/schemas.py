from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class DateRangeModel(BaseModel):
    start: str = ""
    end: str = ""


class FilterStateModel(BaseModel):
    person: str = "all"
    month: str = "all"
    date_range: DateRangeModel = Field(default_factory=DateRangeModel)


class LogRequest(BaseModel):
    text: str = ""
    filters: FilterStateModel = Field(default_factory=FilterStateModel)
    skip_blank: bool = False


class MetaPeopleResponse(BaseModel):
    people: List[str]


class MetaMonthsResponse(BaseModel):
    months: List[str]
