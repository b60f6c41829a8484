"""
Filter composition for movie queries.

Search filters are collected as a list of SQLAlchemy column expressions, one
per active input, and folded into a single ``select(Movie)`` with AND. A
filter whose input is absent is never appended, so it contributes no bound
parameter to the compiled statement.

Ratings are stored as text. ``rating_value`` renders the numeric cast for the
current dialect: ``CAST(... AS FLOAT)`` in general, and the strict
``strict_float()`` function on SQLite, whose own CAST turns non-numeric text
into 0 instead of failing.
"""

from typing import Iterable, List, Optional

from sqlalchemy import Float, Select, and_, func, select
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.functions import FunctionElement

from filmstore.database.models import Movie


# Registered on SQLite connections by DatabaseManager
SQLITE_STRICT_FLOAT = "strict_float"


class rating_value(FunctionElement):
    """Numeric value of a text-encoded rating column."""
    type = Float()
    name = "rating_value"
    inherit_cache = True


@compiles(rating_value)
def _compile_rating_value(element, compiler, **kw):
    return "CAST(%s AS FLOAT)" % compiler.process(element.clauses, **kw)


@compiles(rating_value, "sqlite")
def _compile_rating_value_sqlite(element, compiler, **kw):
    return "%s(%s)" % (SQLITE_STRICT_FLOAT, compiler.process(element.clauses, **kw))


def movie_search_filters(
    title: Optional[str] = None,
    years: Optional[Iterable[str]] = None,
    min_rating: float = 0,
) -> List[ColumnElement]:
    """
    Build the predicates for the active search inputs.

    Args:
        title: Case-insensitive substring of the title; empty or None means no filter
        years: Accepted release years; empty or None means no filter
        min_rating: Minimum rating (inclusive); zero or less means no filter

    Returns:
        One predicate per active filter, in title, years, rating order
    """
    filters = []

    if title:
        filters.append(func.lower(Movie.title).contains(title.lower(), autoescape=True))

    year_list = sorted(set(years)) if years else []
    if year_list:
        filters.append(Movie.year.in_(year_list))

    if min_rating > 0:
        filters.append(rating_value(Movie.rating) >= float(min_rating))

    return filters


def movie_search_statement(
    title: Optional[str] = None,
    years: Optional[Iterable[str]] = None,
    min_rating: float = 0,
) -> Select:
    """SELECT over movies restricted by every active search filter."""
    statement = select(Movie)
    filters = movie_search_filters(title=title, years=years, min_rating=min_rating)
    if filters:
        statement = statement.where(and_(*filters))
    return statement


def top_rated_statement(min_rating: float, limit: int) -> Select:
    """Newest movies rated strictly above ``min_rating``, best rated first on ties."""
    return (
        select(Movie)
        .where(rating_value(Movie.rating) > min_rating)
        .order_by(Movie.created_at.desc(), rating_value(Movie.rating).desc())
        .limit(limit)
    )
