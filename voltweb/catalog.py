from __future__ import annotations

from dataclasses import dataclass, field

from voltweb.models import Game

CATEGORIES: list[tuple[str, str]] = [
    ("all", "All Games"),
    ("survival", "Survival"),
    ("action", "Action"),
    ("simulation", "Simulation"),
    ("strategy", "Strategy"),
    ("sandbox", "Sandbox"),
]

PLATFORMS: list[tuple[str, str]] = [
    ("all", "All Platforms"),
    ("PC", "PC"),
    ("Console", "Console"),
    ("Crossplay", "Cross-Platform"),
]

SORT_OPTIONS: list[tuple[str, str]] = [
    ("popular", "Most Popular"),
    ("name", "Name A-Z"),
    ("price", "Lowest Price"),
    ("newest", "Newest"),
]

# name -> (category, platform, max players, tags)
_GAME_TRAITS: dict[str, tuple[str, str, int, list[str]]] = {
    "Minecraft": ("sandbox", "Crossplay", 100, ["Building", "Creative", "Multiplayer"]),
    "CS2": ("action", "PC", 32, ["Competitive", "FPS", "Team-based"]),
    "Rust": ("survival", "PC", 200, ["PvP", "Crafting", "Base Building"]),
    "ARK: Survival": ("survival", "Crossplay", 50, ["Dinosaurs", "Taming", "PvE"]),
    "Valheim": ("survival", "PC", 50, ["Co-op", "Norse", "Exploration"]),
    "Satisfactory": ("simulation", "PC", 50, ["Multiplayer", "Action"]),
    "Factorio": ("simulation", "PC", 50, ["Multiplayer", "Action"]),
    "Squad": ("action", "PC", 50, ["Multiplayer", "Action"]),
}
_DEFAULT_TRAITS = ("action", "PC", 50, ["Multiplayer", "Action"])


@dataclass
class CatalogGame:
    game: Game
    category: str
    platform: str
    max_players: int
    tags: list[str] = field(default_factory=list)
    min_players: int = 1

    @property
    def price(self) -> float:
        try:
            return float(self.game.base_price)
        except ValueError:
            return 0.0


def enhance(game: Game) -> CatalogGame:
    category, platform, max_players, tags = _GAME_TRAITS.get(game.name, _DEFAULT_TRAITS)
    return CatalogGame(
        game=game,
        category=category,
        platform=platform,
        max_players=max_players,
        tags=list(tags),
    )


def _matches(item: CatalogGame, needle: str) -> bool:
    if not needle:
        return True
    return (
        needle in item.game.name.lower()
        or needle in item.game.description.lower()
        or any(needle in tag.lower() for tag in item.tags)
    )


def filter_games(
    games: list[CatalogGame],
    search: str = "",
    category: str = "all",
    platform: str = "all",
    sort_by: str = "popular",
) -> list[CatalogGame]:
    """Search, narrow by category/platform, then sort. Unknown sort keys keep input order."""
    needle = (search or "").strip().lower()
    result = [
        g
        for g in games
        if _matches(g, needle)
        and (category == "all" or g.category == category)
        and (platform == "all" or g.platform == platform)
    ]
    if sort_by == "popular":
        result.sort(key=lambda g: g.game.player_count, reverse=True)
    elif sort_by == "name":
        result.sort(key=lambda g: g.game.name.lower())
    elif sort_by == "price":
        result.sort(key=lambda g: g.price)
    elif sort_by == "newest":
        result.sort(key=lambda g: not g.game.is_new)
    return result
