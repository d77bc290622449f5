import dataclasses

from htpy import (
    Node,
    Renderable,
    body,
    head,
    html,
    link,
    meta,
    style,
    title,
    with_children,
)
from markupsafe import Markup

from ...fonts import ResolvedFont

STYLESHEET_PATH = "/static/globals.css"


@dataclasses.dataclass(frozen=True)
class Metadata:
    title: str
    description: str


METADATA = Metadata(
    title="Data Analyzer",
    description="Powerful data analysis and visualization dashboard",
)


@with_children
def layout(
    children: Node,
    *,
    font: ResolvedFont,
    metadata: Metadata = METADATA,
) -> Renderable:
    """
    The document shell around every page.

    Owns the page metadata and the font token, and renders ``children``
    untouched inside ``<body>``.
    """
    return html(lang="en")[
        head[
            meta(charset="utf-8"),
            meta(name="viewport", content="width=device-width, initial-scale=1"),
            title[metadata.title],
            meta(name="description", content=metadata.description),
            link(rel="stylesheet", href=STYLESHEET_PATH),
            # Built from a trusted font stylesheet, not user input.
            style[Markup(font.stylesheet())],
        ],
        body(class_=f"{font.class_name} antialiased")[children],
    ]
