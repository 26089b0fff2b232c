"""Single-pass rewrite of a document's event stream.

Three rules run over the stream produced by :mod:`folio.compiler.events`:

Headings
    ``# Some Title`` becomes ``<h1 id="some-title"><a class="header"
    href="#some-title">Some Title</a>``. The heading's own closing token
    passes through untouched and closes the element.

Admonitions
    A blockquote whose first text starts with ``#tag:`` becomes a callout::

        > #thm: Every bounded sequence has a convergent subsequence.
        > #def: (General form)

    The tag picks the heading label (``thm`` -> ``Theorem``). A parenthesised
    right-hand side is a subtitle and consumes the line; anything else starts
    the callout's body.

Math
    ``$...$`` and ``$$...$$`` are handed to the math renderer. Failures are
    logged and replaced by a visible error marker; they never stop the build.

State is two values carried through the fold: the level of a heading whose
text has not been seen yet, and whether the next text token is the first one
of a blockquote. Nothing is looked up ahead of the current event.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType

from folio.compiler.events import Event, EventKind
from folio.compiler.math import MathRenderer, render_math
from folio.errors import MathRenderError

logger = logging.getLogger(__name__)

ADMONITION_LABELS: Mapping[str, str] = MappingProxyType({
    "def": "Definition",
    "prop": "Proposition",
    "proof": "Proof",
    "ex": "Example",
    "thm": "Theorem",
})


@dataclass(frozen=True)
class _State:
    pending_heading: int | None = None
    admonition_candidate: bool = False


def slugify(text: str) -> str:
    """Anchor id for a heading: trimmed, lowercased, spaces to hyphens."""
    return text.strip().lower().replace(" ", "-")


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


class EventTransformer:
    """Applies the heading, admonition and math rules to an event stream."""

    def __init__(
        self,
        math_renderer: MathRenderer = render_math,
        labels: Mapping[str, str] = ADMONITION_LABELS,
    ) -> None:
        self._math_renderer = math_renderer
        self._labels = labels

    def transform(self, events: Iterable[Event]) -> Iterator[Event]:
        state = _State()
        for event in events:
            state, emitted = self._step(state, event)
            yield from emitted

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _step(self, state: _State, event: Event) -> tuple[_State, list[Event]]:
        if event.kind is EventKind.MATH:
            return state, [self._render_math(event)]

        if event.kind is EventKind.HEADING_START:
            return replace(state, pending_heading=event.level), []

        if event.kind is EventKind.BLOCKQUOTE_START:
            return replace(state, admonition_candidate=True), []

        if event.kind is EventKind.BLOCKQUOTE_END:
            return state, [event]

        if event.kind is EventKind.TEXT:
            if state.admonition_candidate:
                return replace(state, admonition_candidate=False), self._blockquote_text(event.text)
            if state.pending_heading is not None:
                return (
                    replace(state, pending_heading=None),
                    [self._heading(state.pending_heading, event.text)],
                )

        return state, [event]

    def _render_math(self, event: Event) -> Event:
        try:
            markup = self._math_renderer(event.text, event.mode)
        except MathRenderError as e:
            logger.warning("Maths error: %s\n%s", e.message, event.text)
            markup = (
                '<span class="math-error" style="color: red">'
                f"Maths Error: {_escape(e.message)}</span>"
            )
        return Event.raw(markup)

    def _heading(self, level: int, text: str) -> Event:
        anchor = html.escape(slugify(text))
        return Event.raw(
            f'<h{level} id="{anchor}"><a class="header" href="#{anchor}">{_escape(text)}</a>'
        )

    def _blockquote_text(self, text: str) -> list[Event]:
        left, colon, right = text.partition(":")
        if not colon or not left.startswith("#"):
            return [Event.raw("<blockquote>"), Event.plain(text)]

        tag = left[1:]
        label = self._labels.get(tag.lower(), tag)
        right = right.strip()
        subtitle = right[1:-1] if len(right) >= 2 and right.startswith("(") and right.endswith(")") else None

        small = f" <small>({_escape(subtitle)})</small>" if subtitle is not None else ""
        opening = Event.raw(
            f'<blockquote class="{html.escape(tag.lower())}"><h1>{_escape(label)}{small}</h1>'
        )
        if subtitle is not None:
            return [opening]
        return [opening, Event.plain(right)]
