from __future__ import annotations

import pytest

from voltweb.catalog import enhance, filter_games
from voltweb.models import Game
from voltweb.storage import MemStorage


@pytest.fixture
def catalog():
    return [enhance(g) for g in MemStorage().get_all_games()]


def names(games):
    return [g.game.name for g in games]


@pytest.mark.unit
def test_known_games_get_traits_and_others_default():
    minecraft = enhance(Game("1", "Minecraft", "minecraft", ""))
    other = enhance(Game("2", "Palworld", "palworld", ""))

    assert (minecraft.category, minecraft.platform, minecraft.max_players) == ("sandbox", "Crossplay", 100)
    assert (other.category, other.platform, other.max_players) == ("action", "PC", 50)
    assert other.tags == ["Multiplayer", "Action"]


@pytest.mark.unit
def test_default_sort_is_most_popular(catalog):
    result = filter_games(catalog)

    assert names(result)[:3] == ["Minecraft", "Palworld", "CS2"]
    assert len(result) == len(catalog)


@pytest.mark.unit
def test_search_matches_name_description_and_tags(catalog):
    assert names(filter_games(catalog, search="RUST")) == ["Rust"]
    assert names(filter_games(catalog, search="zombie")) == ["7 Days to Die"]
    assert names(filter_games(catalog, search="norse")) == ["Valheim"]


@pytest.mark.unit
def test_category_and_platform_filters(catalog):
    survival = filter_games(catalog, category="survival", sort_by="name")
    crossplay = filter_games(catalog, platform="Crossplay", sort_by="name")

    assert names(survival) == ["ARK: Survival", "Rust", "Valheim"]
    assert names(crossplay) == ["ARK: Survival", "Minecraft"]


@pytest.mark.unit
def test_price_and_newest_sorting(catalog):
    assert names(filter_games(catalog, sort_by="price"))[0] == "Minecraft"
    assert names(filter_games(catalog, sort_by="newest"))[0] == "ARK: Survival"


@pytest.mark.unit
def test_no_match_returns_empty(catalog):
    assert filter_games(catalog, search="tetris") == []


@pytest.mark.unit
def test_unknown_sort_key_keeps_order(catalog):
    assert names(filter_games(catalog, sort_by="random")) == names(catalog)


@pytest.mark.unit
def test_bad_price_sorts_as_zero():
    cheap = enhance(Game("1", "Odd", "odd", "", base_price="free"))
    paid = enhance(Game("2", "Paid", "paid", "", base_price="1.00"))

    assert names(filter_games([paid, cheap], sort_by="price")) == ["Odd", "Paid"]
