from __future__ import annotations

import logging
import uuid
from dataclasses import replace

from voltweb.models import (
    BlogPost,
    DemoServer,
    Faq,
    Game,
    ServerLocation,
    ServiceStatus,
)


def _new_id() -> str:
    return str(uuid.uuid4())


class MemStorage:
    """
    In-memory store behind the listing API.

    Seeded with the catalog, demo servers, platform status and content the
    site shows out of the box. Records are keyed by id; listing order is
    insertion order unless a method says otherwise.
    """

    def __init__(self, seed: bool = True) -> None:
        self._games: dict[str, Game] = {}
        self._demo_servers: dict[str, DemoServer] = {}
        self._service_status: dict[str, ServiceStatus] = {}
        self._locations: dict[str, ServerLocation] = {}
        self._blog_posts: dict[str, BlogPost] = {}
        self._faqs: dict[str, Faq] = {}
        if seed:
            self._initialize_data()

    # ---- Games ----

    def get_all_games(self) -> list[Game]:
        return list(self._games.values())

    def get_game(self, game_id: str) -> Game | None:
        return self._games.get(game_id)

    def get_game_by_slug(self, slug: str) -> Game | None:
        return next((g for g in self._games.values() if g.slug == slug), None)

    def create_game(self, game: Game) -> Game:
        if not game.id:
            game = replace(game, id=_new_id())
        self._games[game.id] = game
        return game

    # ---- Demo servers ----

    def get_active_demo_servers(self) -> list[DemoServer]:
        active = [s for s in self._demo_servers.values() if s.is_enabled]
        return sorted(active, key=lambda s: s.sort_order)

    def get_demo_server(self, server_id: str) -> DemoServer | None:
        return self._demo_servers.get(server_id)

    def get_demo_servers_by_game_id(self, game_id: str) -> list[DemoServer]:
        return [s for s in self.get_active_demo_servers() if s.game_id == game_id]

    def create_demo_server(self, server: DemoServer) -> DemoServer:
        if not server.id:
            server = replace(server, id=_new_id())
        self._demo_servers[server.id] = server
        return server

    # ---- Platform status / locations ----

    def get_all_service_status(self) -> list[ServiceStatus]:
        return list(self._service_status.values())

    def create_service_status(self, status: ServiceStatus) -> ServiceStatus:
        if not status.id:
            status = replace(status, id=_new_id())
        self._service_status[status.id] = status
        return status

    def get_all_server_locations(self) -> list[ServerLocation]:
        return list(self._locations.values())

    def get_server_location(self, location_id: str) -> ServerLocation | None:
        return self._locations.get(location_id)

    def create_server_location(self, location: ServerLocation) -> ServerLocation:
        if not location.id:
            location = replace(location, id=_new_id())
        self._locations[location.id] = location
        return location

    # ---- Content ----

    def get_published_blog_posts(self) -> list[BlogPost]:
        return [p for p in self._blog_posts.values() if p.is_published]

    def get_blog_post_by_slug(self, slug: str) -> BlogPost | None:
        return next(
            (p for p in self._blog_posts.values() if p.slug == slug and p.is_published),
            None,
        )

    def create_blog_post(self, post: BlogPost) -> BlogPost:
        if not post.id:
            post = replace(post, id=_new_id())
        self._blog_posts[post.id] = post
        return post

    def get_all_faqs(self) -> list[Faq]:
        return sorted(self._faqs.values(), key=lambda f: f.sort_order)

    def create_faq(self, faq: Faq) -> Faq:
        if not faq.id:
            faq = replace(faq, id=_new_id())
        self._faqs[faq.id] = faq
        return faq

    # ---- Seed data ----

    def _initialize_data(self) -> None:
        games = [
            Game("", "Minecraft", "minecraft", "Java & Bedrock support, unlimited mods, automatic backups",
                 base_price="2.99", player_count=2847, is_popular=True),
            Game("", "CS2", "cs2", "Counter-Strike 2 servers with custom maps and plugins",
                 base_price="4.99", player_count=1234),
            Game("", "Rust", "rust", "Survival servers with oxide plugins and custom maps",
                 base_price="6.99", player_count=892),
            Game("", "ARK: Survival", "ark", "Dinosaur survival with clusters and mod support",
                 base_price="8.99", player_count=445, is_new=True),
            Game("", "Valheim", "valheim", "Viking survival servers with dedicated worlds",
                 base_price="5.99", player_count=678),
            Game("", "7 Days to Die", "7dtd", "Zombie survival with custom mods and maps",
                 base_price="7.99", player_count=223),
            Game("", "Palworld", "palworld", "Creature collection servers with multiplayer support",
                 base_price="9.99", player_count=1567, is_trending=True),
        ]
        for game in games:
            self.create_game(game)

        minecraft = self.get_game_by_slug("minecraft")
        minecraft_id = minecraft.id if minecraft else None
        demo_servers = [
            DemoServer("", "VoltServers Creative Hub", "minecraft", "demo.voltservers.com", 25565, 100,
                       description="Build anything you can imagine in our creative showcase server",
                       game_id=minecraft_id, sort_order=0),
            DemoServer("", "Survival Adventures", "minecraft", "survival.voltservers.com", 25566, 50,
                       description="Classic survival gameplay with friendly community",
                       game_id=minecraft_id, sort_order=1),
        ]
        for server in demo_servers:
            self.create_demo_server(server)

        for service, response_time, uptime in (
            ("Game Servers", 12, "99.97"),
            ("Control Panel", 15, "99.95"),
            ("API Services", 8, "99.99"),
            ("Billing System", 20, "99.98"),
        ):
            self.create_service_status(
                ServiceStatus("", service, "operational", response_time, uptime)
            )

        for name, region, icon in (
            ("US East, US West", "North America", "public"),
            ("London, Frankfurt", "Europe", "public"),
            ("Singapore, Tokyo", "Asia Pacific", "public"),
            ("Sydney, Melbourne", "Australia", "public"),
        ):
            self.create_server_location(ServerLocation("", name, region, "online", icon))

        self.create_blog_post(
            BlogPost("", "optimizing-minecraft-performance", "Optimizing Minecraft Server Performance",
                     "Paper, view distance and pre-generated worlds: the three biggest wins.",
                     tags=["minecraft", "performance"])
        )
        self.create_blog_post(
            BlogPost("", "cs2-server-setup", "Setting Up a CS2 Community Server",
                     "From GSLT tokens to map groups in fifteen minutes.",
                     tags=["cs2", "guides"])
        )
        self.create_blog_post(
            BlogPost("", "palworld-dedicated-preview", "Palworld Dedicated Servers",
                     "Coming soon.", is_published=False)
        )

        faqs = [
            ("How quickly is my server set up?",
             "Servers are provisioned automatically within minutes of payment.", "billing"),
            ("Can I install mods and plugins?",
             "Yes. Every plan includes full file access and one-click mod installers.", "servers"),
            ("Do you offer DDoS protection?",
             "All locations include always-on DDoS mitigation at no extra cost.", "network"),
            ("Can I change my server location later?",
             "Open a support ticket and we will migrate your server between locations.", "servers"),
            ("What is your refund policy?",
             "New services can be refunded within 48 hours of purchase.", "billing"),
        ]
        for order, (question, answer, category) in enumerate(faqs):
            self.create_faq(Faq("", question, answer, category, order))

        logging.debug(
            "Storage seeded: %d games, %d demo servers", len(self._games), len(self._demo_servers)
        )


# Module-level singleton instance
storage = MemStorage()
