"""Event stream over a markdown body, backed by markdown-it-py.

markdown-it produces block tokens with nested ``inline`` children. The
transformer wants one flat, left-to-right sequence, so :func:`tokenize`
flattens the children in place and tags every token with an
:class:`EventKind`. Tokens the transformer never inspects travel as ``OTHER``
events carrying the original token, and :func:`render` regroups them and feeds
them back to the markdown-it renderer unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from folio.config.models import MarkdownConfig


class EventKind(Enum):
    HEADING_START = "heading_start"
    TEXT = "text"
    MATH = "math"
    BLOCKQUOTE_START = "blockquote_start"
    BLOCKQUOTE_END = "blockquote_end"
    RAW = "raw"
    OTHER = "other"


class MathMode(str, Enum):
    INLINE = "inline"
    DISPLAY = "display"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    text: str = ""
    level: int | None = None
    mode: MathMode | None = None
    token: Token | None = None

    @classmethod
    def heading_start(cls, level: int) -> Event:
        return cls(EventKind.HEADING_START, level=level)

    @classmethod
    def plain(cls, text: str) -> Event:
        return cls(EventKind.TEXT, text=text)

    @classmethod
    def math(cls, expression: str, mode: MathMode) -> Event:
        return cls(EventKind.MATH, text=expression, mode=mode)

    @classmethod
    def blockquote_start(cls) -> Event:
        return cls(EventKind.BLOCKQUOTE_START)

    @classmethod
    def blockquote_end(cls) -> Event:
        return cls(EventKind.BLOCKQUOTE_END)

    @classmethod
    def raw(cls, html: str) -> Event:
        return cls(EventKind.RAW, text=html)

    @classmethod
    def other(cls, token: Token) -> Event:
        return cls(EventKind.OTHER, token=token)


_INLINE_MATH = {"math_inline", "math_inline_double"}
_DISPLAY_MATH = {"math_block", "math_block_label"}


def create_parser(config: MarkdownConfig | None = None) -> MarkdownIt:
    """Build a CommonMark parser with the extensions enabled in *config*."""
    config = config or MarkdownConfig()
    md = MarkdownIt("commonmark", {"html": config.html})
    if config.tables:
        md.enable("table")
    if config.strikethrough:
        md.enable("strikethrough")
    if config.footnotes:
        md.use(footnote_plugin)
    if config.tasklists:
        md.use(tasklists_plugin)
    if config.math:
        md.use(dollarmath_plugin)
    return md


def tokenize(md: MarkdownIt, body: str, env: dict[str, Any] | None = None) -> Iterator[Event]:
    """Parse *body* and yield its events in document order.

    *env* must be handed to :func:`render` as well; plugins such as footnotes
    keep their reference tables there.
    """
    for token in md.parse(body, env if env is not None else {}):
        if token.type == "inline":
            for child in token.children or ():
                yield _classify(child)
        else:
            yield _classify(token)


def _classify(token: Token) -> Event:
    if token.type == "heading_open":
        return Event(EventKind.HEADING_START, level=int(token.tag[1:]), token=token)
    if token.type == "blockquote_open":
        return Event(EventKind.BLOCKQUOTE_START, token=token)
    if token.type == "blockquote_close":
        return Event(EventKind.BLOCKQUOTE_END, token=token)
    if token.type == "text":
        return Event(EventKind.TEXT, text=token.content, token=token)
    if token.type in _INLINE_MATH:
        return Event(EventKind.MATH, text=token.content, mode=MathMode.INLINE, token=token)
    if token.type in _DISPLAY_MATH:
        return Event(EventKind.MATH, text=token.content.strip(), mode=MathMode.DISPLAY, token=token)
    return Event.other(token)


def to_token(event: Event) -> Token:
    """Convert an event back into a token the HTML renderer understands."""
    if event.kind is EventKind.RAW:
        return Token("html_inline", "", 0, content=event.text)
    if event.kind is EventKind.TEXT:
        return Token("text", "", 0, content=event.text)
    if event.token is not None:
        return event.token
    if event.kind is EventKind.HEADING_START:
        return Token("heading_open", f"h{event.level}", 1, block=True)
    if event.kind is EventKind.BLOCKQUOTE_START:
        return Token("blockquote_open", "blockquote", 1, block=True)
    if event.kind is EventKind.BLOCKQUOTE_END:
        return Token("blockquote_close", "blockquote", -1, block=True)
    if event.kind is EventKind.MATH:
        token_type = "math_block" if event.mode is MathMode.DISPLAY else "math_inline"
        return Token(token_type, "math", 0, content=event.text)
    raise ValueError(f"Event {event.kind.value!r} has no token to render")


def render(md: MarkdownIt, events: Iterable[Event], env: dict[str, Any] | None = None) -> str:
    """Render an event stream to HTML with *md*'s renderer.

    Runs of non-block tokens are regrouped under ``inline`` tokens, which is
    the shape the renderer's newline handling expects.
    """
    tokens: list[Token] = []
    run: list[Token] = []
    for event in events:
        token = to_token(event)
        if token.block:
            if run:
                tokens.append(Token("inline", "", 0, children=run))
                run = []
            tokens.append(token)
        else:
            run.append(token)
    if run:
        tokens.append(Token("inline", "", 0, children=run))
    return md.renderer.render(tokens, md.options, env if env is not None else {})
