from __future__ import annotations

import pytest

from voltweb.services.consent import (
    CONSENT_VERSION,
    DEFAULT_CATEGORIES,
    ConsentStore,
    CookieCategory,
    get_cookie_preferences,
    has_cookie_consent,
)

KEY = "cookie-consent"


@pytest.mark.unit
def test_fresh_visitor_sees_banner_and_has_no_consent():
    store = ConsentStore({})

    assert store.needs_banner()
    assert store.load() is None
    assert not store.has_consent("necessary")
    assert store.preferences() == {"necessary": True, "analytics": False, "marketing": False}


@pytest.mark.unit
def test_accept_all_grants_every_category():
    storage: dict = {}

    ConsentStore(storage).accept_all()

    for category in DEFAULT_CATEGORIES:
        assert has_cookie_consent(storage, category.id)
    assert not ConsentStore(storage).needs_banner()


@pytest.mark.unit
def test_accept_necessary_grants_only_required():
    storage: dict = {}

    ConsentStore(storage).accept_necessary()

    assert has_cookie_consent(storage, "necessary")
    assert not has_cookie_consent(storage, "analytics")
    assert not has_cookie_consent(storage, "marketing")


@pytest.mark.unit
def test_stored_record_is_versioned():
    storage: dict = {}

    ConsentStore(storage).accept_all()

    assert storage[KEY] == {
        "version": CONSENT_VERSION,
        "categories": {"necessary": True, "analytics": True, "marketing": True},
    }


@pytest.mark.unit
def test_save_cannot_turn_off_required_category():
    storage: dict = {}

    prefs = ConsentStore(storage).save({"necessary": False, "analytics": True})

    assert prefs == {"necessary": True, "analytics": True, "marketing": False}
    assert get_cookie_preferences(storage) == prefs


@pytest.mark.unit
def test_toggle_flips_optional_and_ignores_required_or_unknown():
    store = ConsentStore({})
    prefs = store.defaults()

    prefs = store.toggle(prefs, "analytics")
    assert prefs["analytics"] is True
    assert store.toggle(prefs, "necessary") == prefs
    assert store.toggle(prefs, "nope") == prefs
    # Toggling never persists
    assert store.needs_banner()


@pytest.mark.unit
def test_unknown_category_has_no_consent():
    storage: dict = {}
    ConsentStore(storage).accept_all()

    assert not has_cookie_consent(storage, "personalization")


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        42,
        {"version": 1, "categories": {"analytics": "yes"}},
        {"version": 99, "categories": {"analytics": True}},
        {"version": 1},
    ],
)
def test_malformed_record_means_no_consent(raw):
    store = ConsentStore({KEY: raw})

    assert store.load() is None
    assert store.needs_banner()
    assert not store.has_consent("necessary")


@pytest.mark.unit
def test_legacy_boolean_strings_migrate():
    accepted = ConsentStore({KEY: "true"}).load()
    declined = ConsentStore({KEY: "false"}).load()

    assert accepted is not None and accepted.version == 0
    assert all(accepted.categories.values())
    assert declined is not None
    assert declined.categories == {"necessary": True, "analytics": False, "marketing": False}


@pytest.mark.unit
def test_legacy_bare_object_and_json_string_migrate():
    bare = ConsentStore({KEY: {"necessary": True, "analytics": True}}).load()
    text = ConsentStore({KEY: '{"necessary": true, "marketing": true}'}).load()

    assert bare is not None and bare.version == 0 and bare.categories["analytics"]
    assert text is not None and text.categories["marketing"]


@pytest.mark.unit
def test_custom_categories():
    store = ConsentStore({}, categories=[CookieCategory("essential", "Essential", "", True)])

    assert store.accept_necessary() == {"essential": True}
    assert store.has_consent("essential")


@pytest.mark.unit
def test_category_dict_round_trip():
    c = CookieCategory.from_dict({"id": "analytics", "name": "Analytics"})

    assert c.to_dict() == {"id": "analytics", "name": "Analytics", "description": "", "required": False}
