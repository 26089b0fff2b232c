"""LaTeX to MathML rendering via latex2mathml."""

from __future__ import annotations

from collections.abc import Callable

from latex2mathml.converter import convert

from folio.compiler.events import MathMode
from folio.errors import MathRenderError

MathRenderer = Callable[[str, MathMode], str]


def render_math(expression: str, mode: MathMode) -> str:
    """Render *expression* as a MathML ``<math>`` element.

    Raises :class:`MathRenderError` with the converter's message when the
    expression cannot be parsed.
    """
    display = "block" if mode is MathMode.DISPLAY else "inline"
    try:
        return convert(expression, display=display)
    except Exception as e:
        # latex2mathml raises a dozen unrelated exception types
        message = str(e) or type(e).__name__
        raise MathRenderError(message) from e
