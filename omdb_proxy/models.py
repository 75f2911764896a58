from __future__ import annotations

from dataclasses import dataclass, field


def omdb(name: str, default=None):
    """Declare a field stored under ``name`` in OMDB's JSON."""
    return field(default=default, metadata={"omdb": name})


@dataclass
class LookupRequest:
    imdb_id: str = ""
    title: str = ""
    type: str = ""
    year: str = ""
    plot: str = ""
    return_type: str = ""
    callback: str = ""
    version: str = ""


@dataclass
class SearchRequest:
    search: str = ""
    type: str = ""
    year: str = ""
    return_type: str = ""
    page: str = ""
    callback: str = ""
    version: str = ""


@dataclass
class Rating:
    source: str | None = omdb("Source")
    value: str | None = omdb("Value")


@dataclass
class LookupResult:
    title: str | None = omdb("Title")
    year: str | None = omdb("Year")
    rated: str | None = omdb("Rated")
    released: str | None = omdb("Released")
    runtime: str | None = omdb("Runtime")
    genre: str | None = omdb("Genre")
    director: str | None = omdb("Director")
    writer: str | None = omdb("Writer")
    actors: str | None = omdb("Actors")
    plot: str | None = omdb("Plot")
    language: str | None = omdb("Language")
    country: str | None = omdb("Country")
    awards: str | None = omdb("Awards")
    poster: str | None = omdb("Poster")
    ratings: list[Rating] | None = omdb("Ratings")
    metascore: str | None = omdb("Metascore")
    imdb_rating: str | None = omdb("imdbRating")
    imdb_votes: str | None = omdb("imdbVotes")
    imdb_id: str | None = omdb("imdbID")
    type: str | None = omdb("Type")
    dvd: str | None = omdb("DVD")
    box_office: str | None = omdb("BoxOffice")
    production: str | None = omdb("Production")
    website: str | None = omdb("Website")
    response: str | None = omdb("Response")
    error: str | None = omdb("Error")


@dataclass
class SearchResultItem:
    title: str | None = omdb("Title")
    year: str | None = omdb("Year")
    imdb_id: str | None = omdb("imdbID")
    type: str | None = omdb("Type")
    poster: str | None = omdb("Poster")


@dataclass
class SearchResult:
    search: list[SearchResultItem] | None = omdb("Search")
    total_results: str | None = omdb("totalResults")
    response: str | None = omdb("Response")
    error: str | None = omdb("Error")
