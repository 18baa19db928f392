from __future__ import annotations

import json
import logging
from collections.abc import Mapping, MutableMapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from voltweb.constants import COOKIE_CONSENT_KEY

# Bump when the stored shape changes; _coerce_record() migrates older shapes
CONSENT_VERSION = 1


@dataclass(frozen=True)
class CookieCategory:
    id: str
    name: str
    description: str
    required: bool = False

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> CookieCategory:
        return CookieCategory(
            id=str(d["id"]),
            name=str(d.get("name", d["id"])),
            description=str(d.get("description", "")),
            required=bool(d.get("required", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "required": self.required,
        }


DEFAULT_CATEGORIES: tuple[CookieCategory, ...] = (
    CookieCategory("necessary", "Necessary", "Essential for website functionality", True),
    CookieCategory("analytics", "Analytics", "Help us understand how visitors use our site"),
    CookieCategory("marketing", "Marketing", "Used to deliver relevant advertisements"),
)


@dataclass
class ConsentRecord:
    """What the visitor agreed to, as persisted."""

    categories: dict[str, bool] = field(default_factory=dict)
    version: int = CONSENT_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {"version": self.version, "categories": dict(self.categories)}


class ConsentStore:
    """
    Cookie-consent preferences on top of a key-value storage
    (NiceGUI app.storage.user in the running site, a dict in tests).
    """

    def __init__(
        self,
        storage: MutableMapping[str, Any],
        categories: Sequence[CookieCategory] = DEFAULT_CATEGORIES,
        key: str = COOKIE_CONSENT_KEY,
    ) -> None:
        self.storage = storage
        self.categories = tuple(categories)
        self.key = key

    # ---- Reading ----

    def load(self) -> ConsentRecord | None:
        """Stored record, migrated to the current version; None if absent or malformed."""
        raw = self.storage.get(self.key)
        if raw is None:
            return None
        try:
            return self._coerce_record(raw)
        except (TypeError, ValueError, KeyError) as e:
            logging.warning("Ignoring malformed cookie consent: %s", e)
            return None

    def needs_banner(self) -> bool:
        return self.load() is None

    def defaults(self) -> dict[str, bool]:
        return {c.id: c.required for c in self.categories}

    def preferences(self) -> dict[str, bool]:
        """Stored choices for every known category, falling back to defaults."""
        record = self.load()
        prefs = self.defaults()
        if record is not None:
            for c in self.categories:
                prefs[c.id] = c.required or bool(record.categories.get(c.id, False))
        return prefs

    def has_consent(self, category_id: str) -> bool:
        record = self.load()
        return record is not None and record.categories.get(category_id) is True

    # ---- Writing ----

    def accept_all(self) -> dict[str, bool]:
        return self._persist({c.id: True for c in self.categories})

    def accept_necessary(self) -> dict[str, bool]:
        return self._persist(self.defaults())

    def save(self, preferences: Mapping[str, bool]) -> dict[str, bool]:
        prefs = {
            c.id: c.required or bool(preferences.get(c.id, False)) for c in self.categories
        }
        return self._persist(prefs)

    def toggle(self, preferences: Mapping[str, bool], category_id: str) -> dict[str, bool]:
        """Flip one optional category in an unsaved preference dict."""
        updated = dict(preferences)
        category = next((c for c in self.categories if c.id == category_id), None)
        if category is None or category.required:
            return updated
        updated[category_id] = not updated.get(category_id, False)
        return updated

    def _persist(self, prefs: dict[str, bool]) -> dict[str, bool]:
        self.storage[self.key] = ConsentRecord(categories=dict(prefs)).to_dict()
        logging.info(
            "Cookie consent saved: %s",
            ", ".join(k for k, v in prefs.items() if v) or "none",
        )
        return prefs

    def _coerce_record(self, raw: Any) -> ConsentRecord:
        if isinstance(raw, str):
            text = raw.strip()
            # Legacy boolean consent: "true" meant everything, "false" only required
            if text in ("true", "false"):
                accepted = text == "true"
                return ConsentRecord(
                    categories={c.id: c.required or accepted for c in self.categories},
                    version=0,
                )
            raw = json.loads(text)
        if not isinstance(raw, Mapping):
            raise TypeError(f"expected an object, got {type(raw).__name__}")
        if "version" in raw:
            version = int(raw["version"])
            if version > CONSENT_VERSION:
                raise ValueError(f"unsupported consent version {version}")
            categories = raw["categories"]
        else:
            # Version 0: a bare {categoryId: bool} object
            version = 0
            categories = raw
        if not isinstance(categories, Mapping) or not all(
            isinstance(v, bool) for v in categories.values()
        ):
            raise ValueError("consent categories must map ids to booleans")
        return ConsentRecord(categories={str(k): v for k, v in categories.items()}, version=version)


def has_cookie_consent(storage: MutableMapping[str, Any], category_id: str) -> bool:
    return ConsentStore(storage).has_consent(category_id)


def get_cookie_preferences(storage: MutableMapping[str, Any]) -> dict[str, bool]:
    record = ConsentStore(storage).load()
    return dict(record.categories) if record else {}
