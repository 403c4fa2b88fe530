from dataclasses import dataclass

from gladest_segments.helpers import ERROR_CLASS, escape_markup, is_error_markup
from gladest_segments.outcomes import PreformedError, RenderFailure, Rendered
from gladest_segments.scanner import MathKind

SUCCESS_CLASS = "gladest"
RENDER_FAILED = "Gladest Error: Failed to render formula."
ENGINE_UNAVAILABLE = "Gladest Error: Render engine unavailable."


@dataclass(frozen=True)
class Fragment:
    markup: str
    kind: MathKind

    @property
    def context(self):
        return self.kind.context

    def __str__(self):
        return self.markup


def success_class(kind):
    return f"{SUCCESS_CLASS} {SUCCESS_CLASS}-{kind.context}"


def error_class(kind):
    return f"{ERROR_CLASS} {ERROR_CLASS}-{kind.context}"


def wrap_success(markup, kind):
    return f'<{kind.tag} class="{success_class(kind)}">{markup}</{kind.tag}>'


def wrap_failure(failure, kind):
    headline = ENGINE_UNAVAILABLE if failure.infrastructure else RENDER_FAILED
    message = failure.message or headline
    return (
        f'<{kind.tag} class="{error_class(kind)}" title="{escape_markup(message)}">'
        f'{headline} Formula: <code>{escape_markup(failure.source)}</code>'
        f'</{kind.tag}>'
    )


def embed(outcome, kind: MathKind) -> Fragment:
    if isinstance(outcome, PreformedError):
        return Fragment(outcome.markup, kind)
    if isinstance(outcome, Rendered):
        if is_error_markup(outcome.markup):
            return Fragment(outcome.markup, kind)
        return Fragment(wrap_success(outcome.markup, kind), kind)
    if isinstance(outcome, RenderFailure):
        return Fragment(wrap_failure(outcome, kind), kind)
    raise TypeError(f"Unknown render outcome: {outcome!r}")
