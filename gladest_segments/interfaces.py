"""
Render capability boundary

A renderer typesets one formula at a time and reports back with a
RenderedFormula or an EngineError. Plain strings are still accepted from
renderers that hand back finished markup.
"""
from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable

from gladest_segments.RenderOptions import FontConfig, RenderFormat, RenderOptions
from gladest_segments.helpers import escape_markup, make_data_uri


@dataclass(frozen=True)
class RenderedFormula:
    formula: str
    inline: bool
    format: RenderFormat
    data: bytes
    width_em: float
    height_em: float
    depth_em: float = 0.0

    def to_html(self):
        env = "math" if self.inline else "displaymath"
        if self.inline:
            align = f"vertical-align: {-self.depth_em:.4f}em;"
        else:
            align = "vertical-align: middle;"
        return (
            f'<img class="gladest {env}" '
            f'style="width: {self.width_em:.4f}em; height: {self.height_em:.4f}em; {align}" '
            f'src="{make_data_uri(self.format.mime_type, self.data)}" '
            f'alt="{escape_markup(self.formula)}"/>'
        )


@dataclass(frozen=True)
class EngineError:
    """The engine understood the request but could not typeset the formula"""
    message: str
    formula: str = ""


RenderResult = Union[RenderedFormula, EngineError]


@runtime_checkable
class FormulaRenderer(Protocol):
    def render_formula(self, source: str, delimiter: str, options: RenderOptions) -> Union[RenderResult, str]:
        """Render ``source``; ``delimiter`` is ``$`` for inline and ``$$`` for block math"""
        ...

    def set_font_config(self, fonts: FontConfig) -> bool:
        """Make ``fonts`` the active fonts for every later render"""
        ...
