"""
Movie API endpoints.
"""

from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.orm import Session

from filmstore.api.dependencies import get_db
from filmstore.api.models.movie import MovieCreate, MovieResponse, MovieList
from filmstore.database import crud
from filmstore.database.errors import NotFoundError, WriteError
from filmstore.database.records import MovieRecord

router = APIRouter(prefix="/api/movies", tags=["movies"])


def _movie_list(movies) -> MovieList:
    return MovieList(
        movies=[MovieResponse.model_validate(m) for m in movies],
        total=len(movies),
    )


@router.get("", response_model=MovieList)
def list_movies(db: Session = Depends(get_db)):
    """List all movies."""
    return _movie_list(crud.fetch_all_movies(db))


@router.get("/top", response_model=MovieList)
def list_top_rated_movies(db: Session = Depends(get_db)):
    """Latest movies rated above 6 (at most 50)."""
    return _movie_list(crud.fetch_top_rated_recent(db))


@router.get("/search", response_model=MovieList)
def search_movies(
    title: str | None = Query(None),
    years: list[str] | None = Query(None),
    min_rating: float = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """Search movies by title, release years, and minimum rating."""
    movies = crud.search_movies(db, title=title, years=set(years or []), min_rating=min_rating)
    return _movie_list(movies)


@router.get("/{code}", response_model=MovieResponse)
def get_movie(code: str, db: Session = Depends(get_db)):
    """Get movie details by code."""
    try:
        return crud.get_movie_by_code(db, code)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=MovieResponse)
def create_movie(movie_in: MovieCreate, db: Session = Depends(get_db)):
    """Add a new movie."""
    movie = MovieRecord(**movie_in.model_dump())
    try:
        crud.insert_movie(db, movie)
    except WriteError as e:
        if crud.is_integrity_error(e):
            raise HTTPException(status_code=409, detail=f"Movie {movie.code} already exists")
        raise
    return movie
