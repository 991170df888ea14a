from datetime import date

import pytest

from movie_catalog.schemas.search import MovieFilters, SortOption
from movie_catalog.services.movie_service import MovieService
from movie_catalog.utils.exceptions import ValidationError
from movie_catalog.utils.pagination import PaginationRequest

from factories import (
    create_actor,
    create_genre,
    create_movie,
    create_platform,
    seed_genre_catalog,
)


def list_titles(db_session, page=1, page_size=20, **filters):
    result = MovieService.list_movies(
        db_session, MovieFilters(**filters), PaginationRequest(page=page, page_size=page_size)
    )
    return [movie.title for movie in result.items], result


def test_total_counts_every_match_not_just_the_page(db_session):
    seed_genre_catalog(db_session, count=45, genre_id=28)

    titles, result = list_titles(db_session, page=1, page_size=20, genre=28)

    assert result.total == 45
    assert len(titles) == 20
    assert result.total_pages == 3
    assert result.has_next


def test_total_is_the_same_on_every_page(db_session):
    seed_genre_catalog(db_session, count=45, genre_id=28)

    totals = {list_titles(db_session, page=p, page_size=20, genre=28)[1].total for p in (1, 2, 3, 4)}

    assert totals == {45}


def test_pages_partition_the_result_set(db_session):
    seed_genre_catalog(db_session, count=45, genre_id=28)

    seen = []
    for page in (1, 2, 3):
        titles, _ = list_titles(db_session, page=page, page_size=20, genre=28)
        seen.extend(titles)

    assert len(seen) == 45
    assert len(set(seen)) == 45
    assert list_titles(db_session, page=3, page_size=20, genre=28)[0][-1] == "Action 44"


def test_page_beyond_the_end_is_empty(db_session):
    seed_genre_catalog(db_session, count=45, genre_id=28)

    titles, result = list_titles(db_session, page=10, page_size=20, genre=28)

    assert titles == []
    assert result.total == 45
    assert not result.has_next


def test_empty_filter_set_returns_everything_best_rated_first(db_session):
    create_movie(db_session, title="Low", rating=3.0)
    create_movie(db_session, title="High", rating=9.0)
    create_movie(db_session, title="Mid", rating=6.5)

    titles, result = list_titles(db_session)

    assert titles == ["High", "Mid", "Low"]
    assert result.total == 3


def test_movies_without_rating_sort_last(db_session):
    create_movie(db_session, title="Unrated")
    create_movie(db_session, title="Rated", rating=1.0)

    titles, _ = list_titles(db_session)

    assert titles == ["Rated", "Unrated"]


def test_title_search_is_case_insensitive_substring(db_session):
    create_movie(db_session, title="The Matrix", rating=8.7)
    create_movie(db_session, title="Matrix Reloaded", rating=7.2)
    create_movie(db_session, title="Inception", rating=8.8)

    titles, _ = list_titles(db_session, title="matrix")

    assert titles == ["The Matrix", "Matrix Reloaded"]


def test_title_search_treats_wildcards_literally(db_session):
    create_movie(db_session, title="100% Wolf", rating=5.0)
    create_movie(db_session, title="1000 Ways", rating=6.0)

    titles, _ = list_titles(db_session, title="100%")

    assert titles == ["100% Wolf"]


def test_filters_combine_with_and(db_session):
    action = create_genre(db_session, name="Action")
    drama = create_genre(db_session, name="Drama")
    create_movie(db_session, title="Good Action", rating=8.0, genres=[action])
    create_movie(db_session, title="Bad Action", rating=4.0, genres=[action])
    create_movie(db_session, title="Good Drama", rating=8.5, genres=[drama])

    titles, result = list_titles(db_session, genre=action.id, min_rating=7.0)

    assert titles == ["Good Action"]
    assert result.total == 1


def test_rating_bounds_are_inclusive(db_session):
    create_movie(db_session, title="Five", rating=5.0)
    create_movie(db_session, title="Seven", rating=7.0)
    create_movie(db_session, title="Nine", rating=9.0)
    create_movie(db_session, title="Unrated")

    titles, _ = list_titles(db_session, min_rating=5.0, max_rating=7.0)

    assert titles == ["Seven", "Five"]


def test_inverted_rating_bounds_match_nothing(db_session):
    create_movie(db_session, title="Seven", rating=7.0)

    titles, result = list_titles(db_session, min_rating=8.0, max_rating=6.0)

    assert titles == []
    assert result.total == 0


def test_year_filter_uses_release_date_and_skips_unknown(db_session):
    create_movie(db_session, title="Early 2010", rating=6.0, released=date(2010, 1, 1))
    create_movie(db_session, title="Late 2010", rating=7.0, released=date(2010, 12, 31))
    create_movie(db_session, title="2011", rating=8.0, released=date(2011, 1, 1))
    create_movie(db_session, title="Unknown", rating=9.0)

    titles, _ = list_titles(db_session, year=2010)

    assert titles == ["Late 2010", "Early 2010"]


def test_year_filter_accepts_the_last_calendar_year(db_session):
    create_movie(db_session, title="Far Future", rating=5.0, released=date(9999, 6, 1))
    create_movie(db_session, title="Near Future", rating=6.0, released=date(9998, 12, 31))

    titles, result = list_titles(db_session, year=9999)

    assert titles == ["Far Future"]
    assert result.total == 1


def test_year_outside_the_calendar_is_rejected(db_session):
    with pytest.raises(ValidationError):
        list_titles(db_session, year=0)


def test_genre_filter_does_not_duplicate_or_drop_other_genres(db_session):
    action = create_genre(db_session, name="Action")
    scifi = create_genre(db_session, name="Sci-Fi")
    create_movie(db_session, title="The Matrix", rating=8.7, genres=[action, scifi])

    _, result = list_titles(db_session, genre=action.id)

    assert result.total == 1
    assert len(result.items) == 1
    assert {g.name for g in result.items[0].genres} == {"Action", "Sci-Fi"}


def test_platform_and_actor_filters(db_session):
    netflix = create_platform(db_session, name="Netflix")
    hbo = create_platform(db_session, name="HBO")
    keanu = create_actor(db_session, name="Keanu Reeves")
    create_movie(db_session, title="John Wick", rating=7.4, platforms=[netflix], actors=[keanu])
    create_movie(db_session, title="Dune", rating=8.0, platforms=[hbo])

    assert list_titles(db_session, platform=netflix.id)[0] == ["John Wick"]
    assert list_titles(db_session, actor="keanu")[0] == ["John Wick"]
    assert list_titles(db_session, platform=hbo.id, actor="keanu")[0] == []


def test_director_and_metacritic_filters(db_session):
    create_movie(db_session, title="Inception", rating=8.8, director="Christopher Nolan", metacritic=74)
    create_movie(db_session, title="Tenet", rating=7.3, director="Christopher Nolan", metacritic=69)
    create_movie(db_session, title="Dune", rating=8.0, director="Denis Villeneuve", metacritic=74)

    assert list_titles(db_session, director="nolan", min_metacritic=70)[0] == ["Inception"]


def test_sort_by_title_and_release_date(db_session):
    create_movie(db_session, title="Beta", rating=5.0, released=date(2001, 1, 1))
    create_movie(db_session, title="Alpha", rating=6.0, released=date(1999, 1, 1))
    create_movie(db_session, title="Gamma", rating=7.0)

    assert list_titles(db_session, sort=SortOption.TITLE)[0] == ["Alpha", "Beta", "Gamma"]
    assert list_titles(db_session, sort=SortOption.RELEASED)[0] == ["Beta", "Alpha", "Gamma"]


def test_same_query_returns_same_page(db_session):
    for i in range(10):
        create_movie(db_session, title=f"Tied {i}", rating=7.0)

    first, _ = list_titles(db_session, page=2, page_size=3)
    second, _ = list_titles(db_session, page=2, page_size=3)

    assert first == second == ["Tied 3", "Tied 4", "Tied 5"]


@pytest.mark.parametrize("pagination", [
    PaginationRequest(page=0, page_size=20),
    PaginationRequest(page=1, page_size=0),
    PaginationRequest(page=1, page_size=41),
])
def test_unresolved_pagination_is_rejected(db_session, pagination):
    with pytest.raises(ValidationError):
        MovieService.list_movies(db_session, MovieFilters(), pagination)


def test_blank_text_filters_are_ignored():
    filters = MovieFilters(title="   ", director="", actor=None)

    assert filters.is_empty()
    assert MovieService.build_predicates(filters) == []
