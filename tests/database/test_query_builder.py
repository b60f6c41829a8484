"""
Unit tests for movie filter composition.

Compiled statements are inspected for their bound parameters; the parameters
actually sent to the driver are captured from a real in-memory store.
"""

import pytest
from sqlalchemy import event
from sqlalchemy.dialects import postgresql, sqlite

from filmstore.database import crud
from filmstore.database.connection import DatabaseManager
from filmstore.database.query_builder import (
    movie_search_filters,
    movie_search_statement,
    top_rated_statement,
)
from filmstore.database.records import MovieRecord


@pytest.fixture
def db_manager():
    manager = DatabaseManager("sqlite://")
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def sent_params(db_manager):
    """Collect the parameters of every statement sent to the driver."""
    captured = []

    def capture(conn, cursor, statement, parameters, context, executemany):
        captured.append(tuple(parameters))

    event.listen(db_manager.engine, "before_cursor_execute", capture)
    yield captured
    event.remove(db_manager.engine, "before_cursor_execute", capture)


class TestMovieSearchStatement:
    """Bound parameters for every combination of search filters."""

    @pytest.mark.parametrize(
        "title, years, min_rating, expected",
        [
            ("", set(), 0, 0),
            (None, None, 0, 0),
            ("alien", set(), 0, 1),
            ("", {"1979"}, 0, 1),
            ("", set(), 7.5, 1),
            ("alien", {"1979"}, 0, 2),
            ("alien", set(), 7.5, 2),
            ("", {"1979", "1986"}, 7.5, 2),
            ("alien", {"1979", "1986"}, 7.5, 3),
        ],
    )
    def test_param_count_matches_active_filters(self, title, years, min_rating, expected):
        statement = movie_search_statement(title=title, years=years, min_rating=min_rating)

        assert len(movie_search_filters(title, years, min_rating)) == expected
        assert len(statement.compile().params) == expected

    def test_no_filters_has_no_where(self):
        sql = str(movie_search_statement("", set(), 0).compile())
        assert "WHERE" not in sql

    def test_negative_rating_is_no_filter(self):
        assert movie_search_filters(min_rating=-1) == []

    def test_years_bound_as_one_list(self):
        params = movie_search_statement(years={"1986", "1979", "1979"}).compile().params
        assert list(params.values()) == [["1979", "1986"]]

    def test_rating_cast_per_dialect(self):
        statement = movie_search_statement(min_rating=7)

        assert "CAST(movies.rating AS FLOAT)" in str(statement.compile(dialect=postgresql.dialect()))
        assert "strict_float(movies.rating)" in str(statement.compile(dialect=sqlite.dialect()))

    def test_top_rated_limit_and_threshold(self):
        params = top_rated_statement(6.0, 50).compile().params
        assert sorted(params.values()) == [6.0, 50]


class TestParametersSentToStore:
    """Skipped filters leave no gap in what the driver receives."""

    def test_title_and_rating_without_years(self, db_manager, sent_params):
        with db_manager.session_scope() as session:
            crud.search_movies(session, title="Alien", years=set(), min_rating=7.5)

        assert sent_params[-1] == ("alien", 7.5)

    def test_years_and_rating_without_title(self, db_manager, sent_params):
        with db_manager.session_scope() as session:
            crud.search_movies(session, title="", years={"1979"}, min_rating=7.5)

        assert sent_params[-1] == ("1979", 7.5)

    def test_no_filters_sends_nothing(self, db_manager, sent_params):
        with db_manager.session_scope() as session:
            crud.search_movies(session, "", set(), 0)

        assert sent_params[-1] == ()

    def test_executes_against_store(self, db_manager):
        with db_manager.session_scope() as session:
            crud.insert_movie(session, MovieRecord("tt0078748", "Alien", "8.5", "1979", ""))
            movies = crud.search_movies(session, title="ALI", years={"1979"}, min_rating=8.5)

        assert [m.code for m in movies] == ["tt0078748"]
