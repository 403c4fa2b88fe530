import logging

from gladest_segments.FragmentEmbedder import embed
from gladest_segments.RenderOptions import normalize
from gladest_segments.helpers import is_error_markup
from gladest_segments.interfaces import EngineError, RenderedFormula
from gladest_segments.outcomes import PreformedError, RenderFailure, Rendered

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 200


def sanitize_message(exc):
    lines = str(exc).strip().splitlines()
    detail = lines[0].strip() if lines else ""
    message = type(exc).__name__ + (": " + detail if detail else "")
    if len(message) > MAX_MESSAGE_LENGTH:
        message = message[:MAX_MESSAGE_LENGTH - 3] + "..."
    return message


def classify(result, source):
    if isinstance(result, RenderedFormula):
        return Rendered(result.to_html())
    if isinstance(result, EngineError):
        logger.info("Could not render formula %r: %s", source, result.message)
        return RenderFailure(result.message, source)
    if isinstance(result, str):
        if is_error_markup(result):
            return PreformedError(result)
        return Rendered(result)
    logger.error("Renderer returned %s for formula %r", type(result).__name__, source)
    return RenderFailure(f"Renderer returned an unexpected {type(result).__name__}", source, infrastructure=True)


def dispatch(region, options, renderer):
    """Render one region and classify what came back.

    Never raises for a single formula: anything thrown by the renderer is
    turned into an infrastructure RenderFailure.
    """
    try:
        result = renderer.render_formula(region.content, region.kind.delimiter, options)
    except Exception as e:
        logger.exception("Render engine failed on formula %r", region.content)
        return RenderFailure(sanitize_message(e), region.content, infrastructure=True)
    return classify(result, region.content)


class RenderSession:
    def __init__(self, renderer, options):
        self.renderer = renderer
        self.options = options
        self.fonts_applied = False
        self.apply_fonts()

    def apply_fonts(self):
        fonts = self.options.fonts
        if fonts.is_empty or self.fonts_applied:
            return
        self.fonts_applied = True
        try:
            accepted = self.renderer.set_font_config(fonts)
        except Exception as e:
            logger.warning("Could not set fonts %s: %s", fonts, sanitize_message(e))
            return
        if accepted is False:
            logger.warning("Renderer rejected font configuration %s", fonts)

    def dispatch(self, region):
        return dispatch(region, self.options, self.renderer)

    def render(self, region):
        return embed(self.dispatch(region), region.kind)


def open_session(config=None, renderer=None):
    options = normalize(config)
    if renderer is None:
        from gladest_segments.MathtextRenderer import MathtextRenderer
        renderer = MathtextRenderer()
    logger.debug("Opening render session with %s", options)
    return RenderSession(renderer, options)
