"""Vendor trust table and marketplace search links."""

from __future__ import annotations

import urllib.parse

TRUSTED_VENDORS: tuple[str, ...] = (
    "Amazon",
    "eBay",
    "Target",
    "Walmart",
    "Shein",
    "Spirit Halloween",
    "Hot Topic",
    "Etsy",
    "ThredUp",
    "ASOS",
    "H&M",
    "Aerie",
    "Old Navy",
    "Anthropologie",
    "Urban Outfitters",
    "Everlane",
    "Levi's",
    "SKIMS",
    "Nike",
    "Nordstrom",
    "Abercrombie & Fitch",
    "Poshmark",
    "Talbots",
    "Macy's",
    "Saks Off 5th",
    "Uniqlo",
    "J. Crew",
    "Madewell",
    "Reformation",
)

DEFAULT_VENDOR = "Amazon"

# Keyed by lower-cased vendor name; anything else uses the Amazon template.
_SEARCH_URL_TEMPLATES: dict[str, str] = {
    "amazon": "https://www.amazon.com/s?k={term}",
    "target": "https://www.target.com/s?searchTerm={term}",
    "walmart": "https://www.walmart.com/search?q={term}",
}


def is_trusted_vendor(vendor: str) -> bool:
    """True iff ``vendor`` contains a trusted vendor name, ignoring case.

    Substring match, so "amazon.com" and "Target (online)" count as trusted.
    """
    folded = vendor.casefold()
    return any(known.casefold() in folded for known in TRUSTED_VENDORS)


def build_search_url(vendor: str, term: str) -> str:
    """Build a vendor search URL for ``term``.

    Only an exact (case-insensitive) vendor name selects its own template.
    """
    template = _SEARCH_URL_TEMPLATES.get(
        vendor.strip().lower(), _SEARCH_URL_TEMPLATES["amazon"]
    )
    return template.format(term=urllib.parse.quote(term, safe="!~*'()"))
