import io
import logging
import re

import matplotlib
from matplotlib import mathtext
from matplotlib.font_manager import FontProperties, fontManager

from gladest_segments.RenderOptions import FontConfig, RenderFormat
from gladest_segments.errors import RenderEngineError
from gladest_segments.interfaces import EngineError, RenderedFormula
from gladest_segments.scanner import BLOCK_MARKER

logger = logging.getLogger(__name__)

FONT_SIZE_PT = 10.0
ENGINE_DEFAULT_PPI = 1200
MEASURE_DPI = 72
BUILTIN_FONTSETS = ("dejavusans", "dejavuserif", "cm", "stix", "stixsans")
DOLLAR_RE = re.compile(r'(\\*)\$')


def _escape_dollar(m):
    slashes = m.group(1)
    return slashes + ("$" if len(slashes) % 2 else "\\$")


def prepare_source(source):
    # mathtext lays out a single line only, and a bare $ would end the math
    text = " ".join(line.strip() for line in source.splitlines() if line.strip())
    return "$" + DOLLAR_RE.sub(_escape_dollar, text) + "$"


class MathtextRenderer:
    """Formula renderer backed by matplotlib's mathtext engine"""

    def __init__(self, fonts=None):
        self.fonts = FontConfig()
        self.parser = mathtext.MathTextParser("path")
        if fonts is not None:
            self.set_font_config(fonts)

    def set_font_config(self, fonts):
        for source in (fonts.body_font, fonts.math_font):
            if source is not None and source.is_file:
                try:
                    fontManager.addfont(source.value)
                except (OSError, RuntimeError) as e:
                    raise RenderEngineError(f"Cannot load font file {source.value}: {e}") from e
        self.fonts = fonts
        return True

    def _family_of(self, source):
        if source.is_file:
            return FontProperties(fname=source.value).get_name()
        return source.value

    def font_properties(self):
        body = self.fonts.body_font
        if body is None:
            prop = FontProperties(size=FONT_SIZE_PT)
        elif body.is_file:
            prop = FontProperties(fname=body.value, size=FONT_SIZE_PT)
        else:
            prop = FontProperties(family=body.value, size=FONT_SIZE_PT)

        math_font = self.fonts.math_font
        if math_font is not None:
            if math_font.is_system and math_font.value.lower() in BUILTIN_FONTSETS:
                prop.set_math_fontfamily(math_font.value.lower())
            else:
                prop.set_math_fontfamily("custom")
        return prop

    def rc_params(self):
        math_font = self.fonts.math_font
        if math_font is None or (math_font.is_system and math_font.value.lower() in BUILTIN_FONTSETS):
            return {}
        family = self._family_of(math_font)
        return {
            "mathtext.fontset": "custom",
            "mathtext.rm": family,
            "mathtext.it": f"{family}:italic",
            "mathtext.bf": f"{family}:bold",
        }

    def render_formula(self, source, delimiter, options):
        inline = delimiter != BLOCK_MARKER
        expression = prepare_source(source)
        prop = self.font_properties()

        with matplotlib.rc_context(self.rc_params()):
            try:
                width, height, depth = self.parser.parse(expression, dpi=MEASURE_DPI, prop=prop)[:3]
            except ValueError as e:
                message = str(e).strip().splitlines()
                return EngineError(message[-1].strip() if message else "Invalid formula", source)

            buf = io.BytesIO()
            if options.format is RenderFormat.PNG:
                dpi = options.effective_ppi or ENGINE_DEFAULT_PPI
                mathtext.math_to_image(expression, buf, prop=prop, dpi=dpi, format="png")
            else:
                mathtext.math_to_image(expression, buf, prop=prop, format="svg")

        return RenderedFormula(
            formula=source,
            inline=inline,
            format=options.format,
            data=buf.getvalue(),
            width_em=width / FONT_SIZE_PT,
            height_em=height / FONT_SIZE_PT,
            depth_em=depth / FONT_SIZE_PT,
        )
