"""Pageview data models."""

from typing import List

from pydantic import BaseModel, Field


class PageviewEntry(BaseModel):
    """One article's ranked view count for one day on one platform."""

    title: str = Field(..., description="Raw article title from the pageview service")
    views: int = Field(..., description="View count", ge=0)
    rank: int = Field(0, description="Position in the day's top list")


class DatedPageviews(BaseModel):
    """Views recorded on a single date."""

    date: str = Field(..., description="ISO 8601 date (YYYY-MM-DDZ)")
    views: int = Field(..., description="View count", ge=0)


class TopPageviews(BaseModel):
    """Top-viewed articles for the day the service actually reported."""

    year: str = Field(..., description="Result year")
    month: str = Field(..., description="Result month")
    day: str = Field(..., description="Result day")
    articles: List[PageviewEntry] = Field(default_factory=list)
