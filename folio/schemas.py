"""Record schemas for Folio content collections.

Each content category has one frozen pydantic model. Text fields are strict
so a number or boolean in a source file is rejected instead of coerced, and
unknown keys are ignored because front matter often carries layout hints.

Key classes:
- BlogPost: An article written as a front-matter document.
- Project: A portfolio project stored as one data file.
- WorkEntry: A position in the work history, stored as one data file.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, StrictStr

from .utils import is_http_url

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _calendar_date(value: Any) -> Any:
    """Accept calendar dates and ISO strings; reduce timestamps to their date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and ISO_DATE_RE.fullmatch(value):
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise ValueError(f"Invalid calendar date '{value}'") from None
    raise ValueError("Input should be a calendar date or YYYY-MM-DD text")


def _http_url(value: str) -> str:
    if not is_http_url(value):
        raise ValueError("Input should be an absolute http(s) URL")
    return value


CalendarDate = Annotated[date, BeforeValidator(_calendar_date)]
UrlText = Annotated[StrictStr, AfterValidator(_http_url)]


class Record(BaseModel):
    """Base for all content records."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class BlogPost(Record):
    """Front matter of a blog post."""

    title: StrictStr
    author: StrictStr
    date: CalendarDate
    tags: list[StrictStr] | None = None
    description: StrictStr | None = None
    image: StrictStr | None = None


class Project(Record):
    """A portfolio project."""

    title: StrictStr
    description: StrictStr
    link: UrlText


class WorkEntry(Record):
    """A work history entry.

    ``date`` is free-form text such as ``"2020-2023"`` and is kept as written.
    """

    title: StrictStr
    company: StrictStr
    date: StrictStr
