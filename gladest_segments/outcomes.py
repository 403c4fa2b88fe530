from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Rendered:
    markup: str


@dataclass(frozen=True)
class PreformedError:
    """Error markup built by the renderer itself, passed through as is"""
    markup: str


@dataclass(frozen=True)
class RenderFailure:
    message: str
    source: str
    infrastructure: bool = False


RenderOutcome = Union[Rendered, PreformedError, RenderFailure]
