"""Tests for the filter predicates and filter chain."""

from __future__ import annotations

import pytest

from whatsontv.filters import (
    filter_shows,
    is_us_platform,
    matches_country,
    matches_genres,
    matches_languages,
    matches_networks,
    matches_types,
    normalize_network_name,
)
from whatsontv.models import ShowOptions


class TestIsUsPlatform:
    """Tests for US platform detection."""

    @pytest.mark.parametrize(
        "name",
        ["Netflix", "netflix", "Disney+", "Disney Plus", "Apple TV+", "apple tv plus", "HBO Max"],
    )
    def test_known_platforms(self, name: str) -> None:
        assert is_us_platform(name) is True

    @pytest.mark.parametrize("name", ["BBC One", "ITV1", "ZDF"])
    def test_other_networks(self, name: str) -> None:
        assert is_us_platform(name) is False

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_empty_name(self, name: str | None) -> None:
        assert is_us_platform(name) is False


class TestNormalizeNetworkName:
    """Tests for Paramount name normalization."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Paramount+", "Paramount+"),
            ("Paramount Plus", "Paramount+"),
            ("paramount plus", "Paramount+"),
            ("Paramount", "Paramount Network"),
            ("Paramount Network", "Paramount Network"),
            ("CBS", "CBS"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_variants(self, name: str | None, expected: str) -> None:
        assert normalize_network_name(name) == expected


class TestPredicates:
    """Tests for the individual match functions."""

    def test_types_case_insensitive(self, make_show) -> None:  # noqa: ANN001
        show = make_show(type="Scripted")
        assert matches_types(show, ["scripted"])
        assert matches_types(show, ["Reality", "SCRIPTED"])
        assert not matches_types(show, ["Reality"])
        assert matches_types(show, [])

    def test_types_are_exact(self, make_show) -> None:  # noqa: ANN001
        assert not matches_types(make_show(type="Scripted"), ["Script"])

    def test_networks_substring(self, make_show) -> None:  # noqa: ANN001
        show = make_show(network="HBO Max")
        assert matches_networks(show, ["hbo"])
        assert matches_networks(show, ["Netflix", "Max"])
        assert not matches_networks(show, ["Netflix"])

    def test_networks_normalize_paramount(self, make_show) -> None:  # noqa: ANN001
        show = make_show(network="Paramount Plus")
        assert matches_networks(show, ["Paramount+"])
        assert not matches_networks(show, ["Paramount Network"])

    def test_networks_missing_network(self, make_show) -> None:  # noqa: ANN001
        assert not matches_networks(make_show(network=""), ["CBS"])
        assert matches_networks(make_show(network=""), [])

    def test_genres_any_match(self, make_show) -> None:  # noqa: ANN001
        show = make_show(genres=("Drama", "Crime"))
        assert matches_genres(show, ["crime"])
        assert matches_genres(show, ["Comedy", "Drama"])
        assert not matches_genres(show, ["Comedy"])
        assert not matches_genres(make_show(genres=()), ["Drama"])

    def test_languages(self, make_show) -> None:  # noqa: ANN001
        assert matches_languages(make_show(language="English"), ["english"])
        assert not matches_languages(make_show(language="Spanish"), ["English"])
        assert not matches_languages(make_show(language=None), ["English"])
        assert matches_languages(make_show(language=None), [])

    def test_country(self, make_show) -> None:  # noqa: ANN001
        assert matches_country(make_show(country="US"), "us")
        assert matches_country(make_show(country=None), "US")
        assert not matches_country(make_show(country="GB", network="BBC One"), "US")
        # US platforms are kept whatever country TVMaze reports
        assert matches_country(make_show(country="GB", network="Netflix"), "US")
        assert matches_country(make_show(country="GB", network="BBC One"), "")


class TestFilterShows:
    """Tests for the filter chain."""

    def test_no_criteria_returns_copy(self, make_show) -> None:  # noqa: ANN001
        shows = [make_show(id=1), make_show(id=2, country="GB", network="BBC One")]
        result = filter_shows(shows, ShowOptions())

        assert result == shows
        assert result is not shows

    def test_criteria_combine_with_and(self, make_show) -> None:  # noqa: ANN001
        shows = [
            make_show(id=1, type="Scripted", genres=("Drama",)),
            make_show(id=2, type="Reality", genres=("Drama",)),
            make_show(id=3, type="Scripted", genres=("Comedy",)),
        ]
        criteria = ShowOptions(types=["Scripted"], genres=["Drama"])

        assert [s.id for s in filter_shows(shows, criteria)] == [1]

    def test_preserves_input_order(self, make_show) -> None:  # noqa: ANN001
        shows = [make_show(id=i, airtime=t) for i, t in ((3, "22:00"), (1, "08:00"), (2, None))]
        result = filter_shows(shows, ShowOptions(types=["Scripted"]))
        assert [s.id for s in result] == [3, 1, 2]

    def test_default_country_alone_keeps_foreign_networks(self, make_show) -> None:  # noqa: ANN001
        """The default country only scopes the request, not the result."""
        shows = [
            make_show(id=1, network="CBS", country="US"),
            make_show(id=2, network="BBC One", country="GB"),
            make_show(id=3, network="BBC iPlayer", country="GB"),
        ]
        assert [s.id for s in filter_shows(shows, ShowOptions())] == [1, 2, 3]

    def test_explicit_country_drops_foreign_networks(self, make_show) -> None:  # noqa: ANN001
        shows = [
            make_show(id=1, network="CBS", country="US"),
            make_show(id=2, network="BBC One", country="GB"),
            make_show(id=3, network="Netflix", country=None),
        ]
        options = ShowOptions(country="US", country_filter=True)
        assert [s.id for s in filter_shows(shows, options)] == [1, 3]

    def test_country_applies_with_other_criteria(self, make_show) -> None:  # noqa: ANN001
        shows = [
            make_show(id=1, network="CBS", country="US"),
            make_show(id=2, network="BBC One", country="GB"),
            make_show(id=3, network="Netflix", country="GB"),
        ]
        options = ShowOptions(types=["Scripted"])
        assert [s.id for s in filter_shows(shows, options)] == [1, 3]

    def test_empty_country_never_filters(self, make_show) -> None:  # noqa: ANN001
        shows = [make_show(id=1, type="Scripted", network="BBC One", country="GB")]
        options = ShowOptions(country="", country_filter=True, types=["Scripted"])
        assert [s.id for s in filter_shows(shows, options)] == [1]

    def test_input_not_mutated(self, make_show) -> None:  # noqa: ANN001
        shows = [make_show(id=1), make_show(id=2, type="Reality")]
        filter_shows(shows, ShowOptions(types=["Reality"]))
        assert [s.id for s in shows] == [1, 2]
