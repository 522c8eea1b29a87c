import pytest

from services.resources import mappers


def test_location_maps_first_geocoding_result() -> None:
    result = {
        "formatted_address": "Seattle, WA, USA",
        "geometry": {"location": {"lat": 47.6062095, "lng": -122.3320708}},
        "address_components": [{"long_name": "Seattle", "short_name": "Seattle"}],
    }

    record = mappers.location("seattle", result)

    assert record == {
        "search_query": "seattle",
        "formatted_query": "Seattle, WA, USA",
        "latitude": 47.6062095,
        "longitude": -122.3320708,
        "short_name": "Seattle",
    }


def test_location_without_components_has_no_short_name() -> None:
    result = {
        "formatted_address": "Somewhere",
        "geometry": {"location": {"lat": 1.0, "lng": 2.0}},
    }
    assert mappers.location("x", result)["short_name"] is None


def test_location_missing_geometry_raises() -> None:
    with pytest.raises(KeyError):
        mappers.location("x", {"formatted_address": "Somewhere"})


def test_weather_renders_epoch_seconds_as_date_text() -> None:
    record = mappers.weather({"summary": "Foggy in the morning.", "time": 1540000000})
    assert record == {"forecast": "Foggy in the morning.", "time": "Sat Oct 20 2018"}


def test_epoch_to_date_text_is_utc() -> None:
    assert mappers.epoch_to_date_text(0) == "Thu Jan 01 1970"


def test_yelp_keeps_listing_fields() -> None:
    business = {
        "name": "Pike Place Chowder",
        "image_url": "https://s3-media.example/chowder.jpg",
        "price": "$$",
        "rating": 4.5,
        "url": "https://www.yelp.com/biz/pike-place-chowder",
        "review_count": 7000,
    }

    assert mappers.yelp(business) == {
        "name": "Pike Place Chowder",
        "image_url": "https://s3-media.example/chowder.jpg",
        "price": "$$",
        "rating": 4.5,
        "url": "https://www.yelp.com/biz/pike-place-chowder",
    }


def test_movie_prefixes_poster_path() -> None:
    item = {
        "title": "Sleepless in Seattle",
        "overview": "A recently widowed man...",
        "vote_average": 6.6,
        "vote_count": 881,
        "poster_path": "/afkYP15OeUOD0tFEmj6VvejuOcz.jpg",
        "popularity": 8.2,
        "release_date": "1993-06-24",
    }

    record = mappers.movie(item)

    assert record["image_url"] == "https://image.tmdb.org/t/p/w500/afkYP15OeUOD0tFEmj6VvejuOcz.jpg"
    assert record["average_votes"] == 6.6
    assert record["total_votes"] == 881
    assert record["released_on"] == "1993-06-24"


def test_movie_without_poster_has_no_image() -> None:
    assert mappers.movie({"title": "Untitled", "poster_path": None})["image_url"] is None


def test_meetup_uses_group_name_and_millisecond_epoch() -> None:
    event = {
        "link": "https://www.meetup.com/seattle-hikers/events/1/",
        "name": "Rattlesnake Ledge",
        "created": 1540000000000,
        "group": {"name": "Seattle Hikers"},
    }

    assert mappers.meetup(event) == {
        "link": "https://www.meetup.com/seattle-hikers/events/1/",
        "name": "Rattlesnake Ledge",
        "creation_date": "Sat Oct 20 2018",
        "host": "Seattle Hikers",
    }


@pytest.mark.parametrize(
    "stamp",
    ["2023-05-01T14:30:00", "2023-05-01 14:30:00"],
)
def test_trail_splits_condition_date_and_time(stamp: str) -> None:
    item = {
        "name": "Rattlesnake Ledge",
        "location": "North Bend, Washington",
        "length": 4.3,
        "stars": 4.4,
        "starVotes": 84,
        "summary": "An extremely popular out-and-back hike.",
        "url": "https://www.hikingproject.com/trail/7021679",
        "conditionDetails": "Dry",
        "conditionDate": stamp,
    }

    record = mappers.trail(item)

    assert record["condition_date"] == "2023-05-01"
    assert record["condition_time"] == "14:30:00"
    assert record["star_votes"] == 84
    assert record["trail_url"] == "https://www.hikingproject.com/trail/7021679"
    assert record["conditions"] == "Dry"


def test_split_date_time_handles_missing_value() -> None:
    assert mappers.split_date_time(None) == (None, None)
    assert mappers.split_date_time("2023-05-01") == ("2023-05-01", None)
