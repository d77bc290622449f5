from __future__ import annotations

from unittest.mock import create_autospec

import pytest

from data_analyzer import fonts

LATIN_400_URL = "https://fonts.gstatic.com/s/courierprime/v9/latin-400.woff2"
LATIN_700_URL = "https://fonts.gstatic.com/s/courierprime/v9/latin-700.woff2"
LATIN_EXT_400_URL = "https://fonts.gstatic.com/s/courierprime/v9/latin-ext-400.woff2"
LATIN_EXT_700_URL = "https://fonts.gstatic.com/s/courierprime/v9/latin-ext-700.woff2"


def _face(weight: int, url: str, unicode_range: str) -> str:
    return f"""\
@font-face {{
  font-family: 'Courier Prime';
  font-style: normal;
  font-weight: {weight};
  font-display: swap;
  src: url({url}) format('woff2');
  unicode-range: {unicode_range};
}}"""


LATIN_RANGE = "U+0000-00FF, U+0131, U+0152-0153"
LATIN_EXT_RANGE = "U+0100-02BA, U+02BD-02C5"

# Trimmed copy of what fonts.googleapis.com returns for Courier Prime.
COURIER_PRIME_CSS = f"""\
/* latin-ext */
{_face(400, LATIN_EXT_400_URL, LATIN_EXT_RANGE)}
/* latin */
{_face(400, LATIN_400_URL, LATIN_RANGE)}
/* latin-ext */
{_face(700, LATIN_EXT_700_URL, LATIN_EXT_RANGE)}
/* latin */
{_face(700, LATIN_700_URL, LATIN_RANGE)}
"""


class FakeCache:
    """In-memory cache that records TTLs."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}

    def get(self, k: str) -> str | None:
        return self.data.get(k)

    def set(self, k: str, v: str, ttl: int | None) -> None:
        if ttl == 0:
            return
        self.data[k] = v
        self.ttls[k] = ttl


def make_font_client(
    stylesheet: str = COURIER_PRIME_CSS, error: Exception | None = None
):
    client = create_autospec(fonts.FontClient, instance=True)
    if error is not None:
        client.get_stylesheet.side_effect = error
    else:
        client.get_stylesheet.return_value = stylesheet
    return client


def make_resolved_font(**overrides) -> fonts.ResolvedFont:
    defaults = dict(
        font=fonts.COURIER_PRIME,
        css=fonts.filter_subsets(COURIER_PRIME_CSS, ("latin",)),
    )
    return fonts.ResolvedFont(**{**defaults, **overrides})


@pytest.fixture
def resolved_font() -> fonts.ResolvedFont:
    return make_resolved_font()
