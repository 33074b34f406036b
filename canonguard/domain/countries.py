"""Static country tables used by the localisation guard and query builder."""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Tuple


def _codes(block: str) -> FrozenSet[str]:
    """Return lowercase codes from a whitespace-separated block."""
    return frozenset(code.lower() for code in block.split())


# Domain and keyword indicators per ISO-2 code. Entries starting with "." are
# domain-style indicators and weigh double in content scoring. Dict order is
# the scan order, so the first matching country wins on ties.
COUNTRY_DOMAINS: Dict[str, Tuple[str, ...]] = {
    "de": (".de", ".german", "deutschland", "germany"),
    "fr": (".fr", ".french", "france", "français"),
    "gb": (".uk", ".co.uk", "united kingdom", "uk", "britain"),
    "us": (".us", ".com", "united states", "usa", "america"),
    "nl": (".nl", "netherlands", "nederland", "holland"),
    "es": (".es", "spain", "españa", "spanish"),
    "it": (".it", "italy", "italia", "italian"),
    "ch": (".ch", "switzerland", "schweiz", "suisse"),
    "at": (".at", "austria", "österreich"),
    "be": (".be", "belgium", "belgië", "belgique"),
}

# Country and demonym names for the explicit mismatch check.
COUNTRY_NAMES: Dict[str, Tuple[str, ...]] = {
    "de": ("germany", "deutschland", "german"),
    "fr": ("france", "français", "french"),
    "gb": ("united kingdom", "uk", "britain", "british"),
    "us": ("united states", "usa", "america", "american"),
    "nl": ("netherlands", "nederland", "dutch"),
    "es": ("spain", "españa", "spanish"),
    "it": ("italy", "italia", "italian"),
    "ch": ("switzerland", "schweiz", "suisse", "swiss"),
    "at": ("austria", "österreich", "austrian"),
    "be": ("belgium", "belgië", "belgique", "belgian"),
}

# Bodies and events that legitimately span countries.
MULTI_COUNTRY_WHITELIST: List[str] = [
    "european-union",
    "european-parliament",
    "european-commission",
    "united-nations",
    "world-economic-forum",
    "g7",
    "g20",
    "nato",
    "world-bank",
    "imf",
    "who",
    "unicef",
]

SEARCH_INTENTS: Tuple[str, ...] = ("event", "speaker", "company", "topic")

SEARCH_LANGUAGES: Tuple[str, ...] = ("en", "de", "fr", "es", "it", "nl", "pl", "pt", "sv", "da", "no", "fi")

ISO_COUNTRY_CODES: FrozenSet[str] = _codes(
    """
    AD AE AF AG AI AL AM AO AQ AR AS AT AU AW AX AZ
    BA BB BD BE BF BG BH BI BJ BL BM BN BO BQ BR BS
    BT BV BW BY BZ CA CC CD CF CG CH CI CK CL CM CN
    CO CR CU CV CW CX CY CZ DE DJ DK DM DO DZ EC EE
    EG EH ER ES ET FI FJ FK FM FO FR GA GB GD GE GF
    GG GH GI GL GM GN GP GQ GR GS GT GU GW GY HK HM
    HN HR HT HU ID IE IL IM IN IO IQ IR IS IT JE JM
    JO JP KE KG KH KI KM KN KP KR KW KY KZ LA LB LC
    LI LK LR LS LT LU LV LY MA MC MD ME MF MG MH MK
    ML MM MN MO MP MQ MR MS MT MU MV MW MX MY MZ NA
    NC NE NF NG NI NL NO NP NR NU NZ OM PA PE PF PG
    PH PK PL PM PN PR PS PT PW PY QA RE RO RS RU RW
    SA SB SC SD SE SG SH SI SJ SK SL SM SN SO SR SS
    ST SV SX SY SZ TC TD TF TG TH TJ TK TL TM TN TO
    TR TT TV TW TZ UA UG UM US UY UZ VA VC VE VG VI
    VN VU WF WS YE YT ZA ZM ZW
    """
)
