import pytest

from budget_tracker.models.constants import CURRENCY_KEY, DARK_MODE_KEY
from budget_tracker.services.preferences import Preferences


def test_defaults(storage):
    prefs = Preferences(storage, default_currency="USD")
    assert prefs.display_currency == "USD"
    assert prefs.dark_mode is False
    assert prefs.mode == "light"


def test_currency_persists_as_plain_string(storage):
    Preferences(storage).set_display_currency("gbp")
    assert storage.get_item(CURRENCY_KEY) == "GBP"
    assert Preferences(storage).display_currency == "GBP"


def test_unknown_currency_rejected(storage):
    prefs = Preferences(storage)
    with pytest.raises(ValueError):
        prefs.set_display_currency("XYZ")
    assert prefs.display_currency == "USD"


def test_unknown_stored_currency_falls_back_to_default(storage):
    storage.set_item(CURRENCY_KEY, "ZZZ")
    assert Preferences(storage, default_currency="EUR").display_currency == "EUR"


def test_dark_mode_flag_strings(storage):
    prefs = Preferences(storage)
    assert prefs.toggle_dark_mode() is True
    assert storage.get_item(DARK_MODE_KEY) == "enabled"
    assert Preferences(storage).dark_mode is True
    prefs.set_mode("light")
    assert storage.get_item(DARK_MODE_KEY) == "disabled"
    with pytest.raises(ValueError):
        prefs.set_mode("sepia")


def test_storage_failure_falls_back_to_defaults(tmp_path):
    from budget_tracker.db.storage import LocalStorage

    broken = LocalStorage(tmp_path / "uninitialised.sqlite3")
    prefs = Preferences(broken, default_currency="USD")
    assert prefs.display_currency == "USD"
    assert prefs.mode == "light"
    # writes fail silently but the in-memory state still changes
    assert prefs.toggle_dark_mode() is True
    assert prefs.set_display_currency("EUR") == "EUR"
