import markdown

from gladest_segments.MarkdownProcessor.MathExtension import GladestMathExtension


class MarkdownProcessor:
    def __init__(self, **math_config):
        self.math_extension = GladestMathExtension(**math_config)
        self.md = markdown.Markdown(extensions=[
            self.math_extension,
            "sane_lists",
            "tables",
            "fenced_code",
        ])

    @property
    def session(self):
        return self.math_extension.session

    def process_markdown(self, text):
        self.md.reset()
        return self.md.convert(text)
