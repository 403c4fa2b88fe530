from markdown.extensions import Extension

from gladest_segments.MarkdownProcessor.MathProcessors import INLINE_START_RE, MathBlockProcessor, MathInlineProcessor
from gladest_segments.RenderDispatcher import open_session
from gladest_segments.RenderOptions import load_config

DEFAULTS = {
    'format': 'svg',
    'ppi': 0,
    'fonts': {},
}


class GladestMathExtension(Extension):
    def __init__(self, **kwargs):
        self.config = {
            'format': [DEFAULTS['format'], 'Image format for rendered formulas: "svg" or "png"'],
            'ppi': [DEFAULTS['ppi'], 'Resolution for png output; zero or less uses the engine default'],
            'fonts': [dict(DEFAULTS['fonts']), 'body_font / math_font, each {"system": name} or {"file": path}'],
            'config_file': ['', 'YAML file holding format, ppi and fonts'],
            'renderer': ['', 'Object with render_formula() and set_font_config(); defaults to matplotlib mathtext'],
        }
        self.explicit = set()
        super().__init__(**kwargs)
        self.session = None

    def setConfig(self, key, value):
        super().setConfig(key, value)
        if key in self.config:
            self.explicit.add(key)

    def render_config(self):
        """Config file settings, overridden by every option passed to the extension"""
        config_file = self.getConfig('config_file')
        settings = load_config(config_file) if config_file else {}
        for key in DEFAULTS:
            if key in self.explicit:
                settings[key] = self.getConfig(key)
        return settings

    def extendMarkdown(self, md):
        md.registerExtension(self)
        self.session = open_session(self.render_config(), self.getConfig('renderer') or None)

        if '$' not in md.ESCAPED_CHARS:
            md.ESCAPED_CHARS.append('$')

        md.parser.blockprocessors.register(MathBlockProcessor(md.parser, self.session), 'gladest_block', 75)
        md.inlinePatterns.register(MathInlineProcessor(INLINE_START_RE, md, self.session), 'gladest_inline', 195)


def makeExtension(**kwargs):
    return GladestMathExtension(**kwargs)
