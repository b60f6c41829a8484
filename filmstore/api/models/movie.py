"""
Pydantic schemas for Movie API.
"""

from pydantic import BaseModel, Field, field_validator

from filmstore.database.records import parse_rating, parse_year


class MovieCreate(BaseModel):
    """Request body for adding a movie."""

    code: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    rating: str
    year: str
    image_link: str = ""

    @field_validator("rating")
    @classmethod
    def rating_is_decimal(cls, value: str) -> str:
        parse_rating(value)
        return value

    @field_validator("year")
    @classmethod
    def year_is_integer(cls, value: str) -> str:
        parse_year(value)
        return value


class MovieResponse(BaseModel):
    """Response model for a single movie."""

    code: str
    title: str
    rating: str
    year: str
    image_link: str

    class Config:
        from_attributes = True


class MovieList(BaseModel):
    """Response model for list of movies with total count."""

    movies: list[MovieResponse]
    total: int
