import pytest

from canonguard.core.exceptions import ConfigurationError
from canonguard.domain import countries
from scripts import validate_country_tables as vct


def test_shipped_tables_are_valid():
    assert vct.validate_country_tables() == []
    vct.assert_valid()


def test_validate_country_tables_missing_domains(monkeypatch):
    monkeypatch.delattr(countries, "COUNTRY_DOMAINS", raising=False)

    errors = vct.validate_country_tables()

    assert any("Missing COUNTRY_DOMAINS" in error for error in errors)


def test_validate_country_tables_detects_invalid_types(monkeypatch):
    monkeypatch.setattr(countries, "COUNTRY_NAMES", ["not-a-dict"], raising=False)
    monkeypatch.setattr(countries, "MULTI_COUNTRY_WHITELIST", "not-a-list", raising=False)

    errors = vct.validate_country_tables()

    assert "COUNTRY_NAMES must be a dict." in errors
    assert "MULTI_COUNTRY_WHITELIST must be a list." in errors


def test_validate_country_tables_detects_bad_entries(monkeypatch):
    monkeypatch.setattr(
        countries,
        "COUNTRY_DOMAINS",
        {"de": (".de", ".de", ""), "XX": ("nowhere",), "fr": ("France",)},
        raising=False,
    )

    errors = vct.validate_country_tables()

    assert any("duplicate value" in error for error in errors)
    assert any("empty/blank string" in error for error in errors)
    assert any("non-lowercase value" in error for error in errors)
    assert any("'XX' is not a lowercase ISO-3166" in error for error in errors)
    assert any("cover different countries" in error for error in errors)


def test_assert_valid_raises_configuration_error(monkeypatch):
    monkeypatch.setattr(countries, "MULTI_COUNTRY_WHITELIST", [], raising=False)

    with pytest.raises(ConfigurationError) as exc_info:
        vct.assert_valid()

    assert "MULTI_COUNTRY_WHITELIST is empty." in exc_info.value.errors


def test_main_exit_codes(monkeypatch, capsys):
    assert vct.main() == 0
    assert "passed" in capsys.readouterr().out

    monkeypatch.setattr(countries, "MULTI_COUNTRY_WHITELIST", [], raising=False)
    assert vct.main() == 1
    assert "failed" in capsys.readouterr().out
