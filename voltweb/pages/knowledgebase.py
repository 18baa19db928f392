from __future__ import annotations

from nicegui import ui

from voltweb.models import BlogPost, Faq, parse_rows
from voltweb.services.api_client import client


class KnowledgeBasePage:
    """FAQ search plus the latest guides from the blog."""

    def __init__(self) -> None:
        self.faqs: list[Faq] = []
        self.posts: list[BlogPost] = []
        self.query = ""

    def matching_faqs(self) -> list[Faq]:
        needle = self.query.strip().lower()
        if not needle:
            return list(self.faqs)
        return [
            f
            for f in self.faqs
            if needle in f.question.lower()
            or needle in f.answer.lower()
            or needle in f.category.lower()
        ]

    def _on_search(self, value: str | None) -> None:
        self.query = value or ""
        self.faq_list.refresh()

    @ui.refreshable
    def faq_list(self) -> None:
        faqs = self.matching_faqs()
        if not faqs:
            ui.label("No articles match your search.").classes("text-sm")
            return
        for faq in faqs:
            with ui.expansion(faq.question).classes("w-full"):
                ui.label(faq.answer).classes("text-sm")
                ui.badge(faq.category, color="grey")

    async def build(self) -> None:
        ui.label("Knowledge Base").classes("text-3xl font-bold")
        self.faqs = parse_rows(await client.get_list("/api/faqs"), Faq.from_dict, "faq")
        self.posts = parse_rows(await client.get_list("/api/blog"), BlogPost.from_dict, "blog post")

        ui.input(label="Search help articles").classes("w-96").props("clearable").on_value_change(
            lambda e: self._on_search(e.value)
        )
        with ui.column().classes("w-full gap-1"):
            self.faq_list()

        if self.posts:
            ui.label("Latest Guides").classes("text-2xl font-bold")
            with ui.element("div").classes("volt-grid"):
                for post in self.posts:
                    with ui.card().classes("w-full gap-1"):
                        ui.label(post.title).classes("text-lg font-medium")
                        ui.label(post.excerpt).classes("text-sm")
                        with ui.row().classes("gap-1"):
                            for tag in post.tags:
                                ui.chip(tag).props("dense outline")
