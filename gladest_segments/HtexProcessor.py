import html
import logging
import re

from gladest_segments.scanner import MathKind, MathRegion

logger = logging.getLogger(__name__)

EQ_RE = re.compile(r'<eq(?P<attrs>\s[^>]*)?>(?P<body>.*?)</eq\s*>', re.DOTALL | re.IGNORECASE)
ENV_RE = re.compile(r'\benv\s*=\s*(?:"(?P<dq>[^"]*)"|\'(?P<sq>[^\']*)\'|(?P<bare>[^\s"\'>]+))', re.IGNORECASE)
TAG_RE = re.compile(r'<[^>]*>')

ENVIRONMENTS = {
    'math': MathKind.INLINE,
    'displaymath': MathKind.BLOCK,
}


def eq_environment(attrs):
    match = ENV_RE.search(attrs or '')
    if not match:
        logger.warning("No env attribute on <eq>, defaulting to inline")
        return MathKind.INLINE
    env = match.group('dq') or match.group('sq') or match.group('bare') or ''
    if env not in ENVIRONMENTS:
        logger.warning("env '%s' is not recognized, defaulting to inline", env)
        return MathKind.INLINE
    return ENVIRONMENTS[env]


def eq_formula(body):
    return html.unescape(TAG_RE.sub('', body)).strip()


class HtexProcessor:
    """Replaces <eq> elements in an HTML document with rendered formulas"""

    def __init__(self, session):
        self.session = session

    def process(self, text):
        def replace(m):
            formula = eq_formula(m.group('body'))
            if not formula:
                logger.warning("Skipping empty <eq> at offset %d", m.start())
                return m.group(0)
            region = MathRegion(eq_environment(m.group('attrs')), formula, (m.start(), m.end()))
            return self.session.render(region).markup

        return EQ_RE.sub(replace, text)


def process_htex(text, session):
    return HtexProcessor(session).process(text)
