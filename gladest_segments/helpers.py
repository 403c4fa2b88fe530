import base64
import html
import re

ERROR_CLASS = "gladest-error"
ERROR_MARKER_RE = re.compile(r'^\s*<[a-zA-Z][^>]*\bclass\s*=\s*"[^"]*\b' + ERROR_CLASS + r'\b')


def escape_markup(text):
    return html.escape(str(text), quote=True)


def make_data_uri(mime_type, data):
    return "data:" + mime_type + ";base64," + base64.b64encode(data).decode('ascii')


def make_opening_tag(indicer, newline_end=True):
    return "<" + indicer + ">" + (newline_end * "\n")


def make_closing_tag(indicer):
    return "</" + indicer + ">\n"


def make_op_close_inline_tag(indicer, inner):
    return "<" + indicer + ">" + inner + "</" + indicer.split(" ", 1)[0] + ">\n"


def is_error_markup(markup):
    """True when a fragment's outermost element carries the reserved error class"""
    return bool(ERROR_MARKER_RE.match(markup))


def normalize(s):
    return s.replace(" ", "-").lower()
