import pytest

from movie_catalog.client.query_state import MovieQuery, MovieQueryState
from movie_catalog.utils.exceptions import ValidationError


def test_initial_state_is_empty_first_page():
    state = MovieQueryState()

    assert state.filters == MovieQuery()
    assert state.filters.is_empty()
    assert state.page == 1
    assert state.query_params() == {"page": 1, "page_size": 20}


def test_search_text_discards_structured_filters():
    state = MovieQueryState()
    state.set_genre(28)
    state.set_min_rating(7.0)

    state.set_search_text("matrix")

    assert state.filters == MovieQuery(search_text="matrix")
    assert state.query_params() == {"page": 1, "page_size": 20, "title": "matrix"}


def test_structured_filter_discards_search_text():
    state = MovieQueryState()
    state.set_search_text("matrix")

    state.set_genre(28)

    assert state.filters.search_text is None
    assert state.filters.genre_id == 28
    assert "title" not in state.query_params()


def test_blank_search_text_clears_the_filter_set():
    state = MovieQueryState()
    state.set_genre(28)

    state.set_search_text("   ")

    assert state.filters.is_empty()


def test_filter_change_resets_page():
    state = MovieQueryState()
    state.set_page(4)

    state.set_platform(8)

    assert state.page == 1


def test_structured_filters_accumulate():
    state = MovieQueryState()
    state.set_genre(28)
    state.set_platform(8)
    state.set_year(1999)
    state.set_min_rating(6.5)
    state.set_max_rating(9)
    state.set_min_metacritic(70)
    state.set_director("Wachowski")
    state.set_actor("Keanu")
    state.set_sort_order("title")
    state.set_page(2)

    assert state.query_params(page_size=40) == {
        "page": 2,
        "page_size": 40,
        "genre": 28,
        "platform": 8,
        "year": 1999,
        "minRating": 6.5,
        "maxRating": 9,
        "minMetacritic": 70,
        "director": "Wachowski",
        "actor": "Keanu",
        "sort": "title",
    }


def test_clearing_a_filter_removes_its_param():
    state = MovieQueryState()
    state.set_genre(28)

    state.set_genre(None)

    assert "genre" not in state.query_params()


def test_reset_is_idempotent():
    state = MovieQueryState()
    state.set_genre(28)
    state.set_page(3)

    state.reset()
    first = (state.filters, state.page)
    state.reset()

    assert (state.filters, state.page) == first == (MovieQuery(), 1)


@pytest.mark.parametrize("page", [0, -1, 1.5, "2", True])
def test_set_page_rejects_non_positive_integers(page):
    state = MovieQueryState()

    with pytest.raises(ValidationError):
        state.set_page(page)

    assert state.page == 1


def test_every_change_bumps_generation():
    state = MovieQueryState()
    generations = [state.generation]

    state.set_genre(28)
    generations.append(state.generation)
    state.set_page(2)
    generations.append(state.generation)
    state.reset()
    generations.append(state.generation)

    assert generations == sorted(set(generations))


def test_listeners_see_page_only_flag_and_can_unsubscribe():
    state = MovieQueryState()
    events = []
    unsubscribe = state.subscribe(lambda s, page_only: events.append((s.page, page_only)))

    state.set_genre(28)
    state.set_page(2)
    unsubscribe()
    state.set_page(3)

    assert events == [(1, False), (2, True)]


def test_query_params_has_no_side_effects():
    state = MovieQueryState()
    state.set_genre(28)
    generation = state.generation

    state.query_params()
    state.query_params(page_size=5)

    assert state.generation == generation
    assert state.page == 1
