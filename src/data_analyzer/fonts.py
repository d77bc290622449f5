"""Web font tokens.

A font is resolved once when the server starts: its stylesheet is fetched from
Google Fonts, trimmed to the requested character subsets and kept for the
lifetime of the process. The layout exposes it through a CSS custom property
bound by a class on ``<body>``.
"""

from __future__ import annotations

import dataclasses
import logging
import re
import urllib.parse

import httpx

from . import cache

logger = logging.getLogger(__name__)

# One week. The face URLs inside Google's stylesheets are versioned.
FONT_CSS_TTL_SECONDS = 7 * 24 * 60 * 60

# Google Fonts only serves woff2 sources to user agents it recognises.
_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)

_LABELLED_FACE = re.compile(r"/\*\s*([\w-]+)\s*\*/\s*(@font-face\s*\{[^}]*\})")


class FontError(Exception): ...


@dataclasses.dataclass(frozen=True)
class Font:
    family: str
    weights: tuple[int, ...]
    subsets: tuple[str, ...]
    variable: str
    fallback: tuple[str, ...] = ("monospace",)

    @property
    def class_name(self) -> str:
        """The class that binds ``variable`` to this family."""
        return self.variable.removeprefix("--")

    @property
    def stylesheet_url(self) -> str:
        weights = ";".join(str(w) for w in sorted(self.weights))
        query = urllib.parse.urlencode(
            {"family": f"{self.family}:wght@{weights}", "display": "swap"},
            safe=":@;",
        )
        return f"https://fonts.googleapis.com/css2?{query}"

    @property
    def cache_key(self) -> str:
        weights = ",".join(str(w) for w in sorted(self.weights))
        subsets = ",".join(sorted(self.subsets))
        return f"font:{self.family}:{weights}:{subsets}"


COURIER_PRIME = Font(
    family="Courier Prime",
    weights=(400, 700),
    subsets=("latin",),
    variable="--font-courier",
)


@dataclasses.dataclass(frozen=True)
class ResolvedFont:
    font: Font
    css: str

    @property
    def class_name(self) -> str:
        return self.font.class_name

    def stylesheet(self) -> str:
        """The ``@font-face`` rules followed by the token class rule."""
        families = ", ".join([f"'{self.font.family}'", *self.font.fallback])
        token_rule = f".{self.class_name} {{ {self.font.variable}: {families}; }}"
        return f"{self.css.strip()}\n{token_rule}\n"


def filter_subsets(css: str, subsets: tuple[str, ...]) -> str:
    """
    Keep the ``@font-face`` blocks labelled with one of ``subsets``.

    Google labels each block with a comment such as ``/* latin */``. A
    stylesheet without any labels only covers one subset and is returned as-is.
    """
    labelled = _LABELLED_FACE.findall(css)
    if not labelled:
        if "@font-face" not in css:
            raise FontError("Stylesheet contains no @font-face rules")
        return css.strip()

    faces = [face for subset, face in labelled if subset in subsets]
    if not faces:
        available = sorted({subset for subset, _ in labelled})
        raise FontError(
            f"No font faces for subsets {list(subsets)}, available: {available}"
        )
    return "\n".join(faces)


@dataclasses.dataclass(frozen=True)
class FontClient:
    timeout: float = 30
    transport: httpx.AsyncBaseTransport | None = None

    async def get_stylesheet(self, font: Font) -> str:
        """
        GET https://fonts.googleapis.com/css2?family=...
        """
        url = font.stylesheet_url
        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                response = await client.get(
                    url,
                    headers={"User-Agent": _USER_AGENT},
                    timeout=self.timeout,
                )
            except httpx.HTTPError as e:
                raise FontError(f"Failed to fetch {url}: {e}") from e
        if response.status_code != 200:
            raise FontError(
                f"Failed to fetch {url}: {response.status_code} {response.text}"
            )
        return response.text


@dataclasses.dataclass(frozen=True)
class FontResolver:
    client: FontClient
    cache: cache.Cache
    _resolved: dict[Font, ResolvedFont] = dataclasses.field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    async def resolve(self, font: Font) -> ResolvedFont:
        """Resolve ``font``, at most once per resolver."""
        if font in self._resolved:
            return self._resolved[font]
        css = self.cache.get(font.cache_key)
        if css is None:
            logger.info("Fetching %s from %s", font.family, font.stylesheet_url)
            stylesheet = await self.client.get_stylesheet(font)
            css = filter_subsets(stylesheet, font.subsets)
            self.cache.set(font.cache_key, css, FONT_CSS_TTL_SECONDS)
        resolved = ResolvedFont(font=font, css=css)
        self._resolved[font] = resolved
        return resolved
