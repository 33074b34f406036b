import pytest

from canonguard.core.exceptions import CountryCodeError
from canonguard.domain.taxonomy import CountryTaxonomy


@pytest.fixture
def taxonomy():
    return CountryTaxonomy()


def test_indicator_split(taxonomy):
    assert taxonomy.domain_indicators("GB") == (".uk", ".co.uk")
    assert taxonomy.term_indicators("gb") == ("united kingdom", "uk", "britain")
    assert taxonomy.domain_indicators("jp") == ()


@pytest.mark.parametrize(("raw", "expected"), [("FR", "fr"), (" de ", "de"), ("jp", "jp")])
def test_normalise_code(taxonomy, raw, expected):
    assert taxonomy.normalise_code(raw) == expected


@pytest.mark.parametrize("raw", ["XX", "fra", "", None, 33])
def test_normalise_code_rejects_non_iso(taxonomy, raw):
    with pytest.raises(CountryCodeError):
        taxonomy.normalise_code(raw)


def test_tables_cover_the_same_countries(taxonomy):
    assert set(taxonomy.country_domains) == set(taxonomy.country_names)
    assert {"de", "fr", "gb", "us", "nl", "es", "it", "ch", "at", "be"} <= set(taxonomy.country_domains)
    assert "g20" in taxonomy.multi_country_whitelist
