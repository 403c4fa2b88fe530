import re
import xml.etree.ElementTree as etree

from markdown.blockprocessors import BlockProcessor
from markdown.inlinepatterns import BACKTICK_RE, InlineProcessor

from gladest_segments.scanner import find_inline, scan_block

BLOCK_START_RE = re.compile(r'^[ \t]*\$\$', re.MULTILINE)
INLINE_START_RE = r'\$'
CODE_SPAN_RE = re.compile(BACKTICK_RE, re.DOTALL | re.UNICODE)


def code_spans(data):
    return [m.span() for m in CODE_SPAN_RE.finditer(data) if m.group(2)]


class MathBlockProcessor(BlockProcessor):
    def __init__(self, parser, session):
        super().__init__(parser)
        self.session = session

    def test(self, parent, block):
        return bool(BLOCK_START_RE.search(block))

    def run(self, parent, blocks):
        block = blocks[0]
        text = '\n\n'.join(blocks)

        region = None
        for m in BLOCK_START_RE.finditer(block):
            region = scan_block(text, m.start())
            if region is not None:
                break
        if region is None:
            return False

        before = block[:region.start].rstrip('\n')
        remainder = text[region.end:].lstrip('\n')
        del blocks[:]

        if before.strip():
            self.parser.parseBlocks(parent, [before])

        fragment = self.session.render(region)
        p = etree.SubElement(parent, 'p')
        p.text = self.parser.md.htmlStash.store(fragment.markup)

        if remainder:
            blocks.extend(remainder.split('\n\n'))
        return True


class MathInlineProcessor(InlineProcessor):
    def __init__(self, pattern, md, session):
        super().__init__(pattern, md)
        self.session = session

    def handleMatch(self, m, data):
        # whichever of a code span and a formula opens first owns the text
        spans = code_spans(data)
        pos = m.start(0)
        while True:
            region = find_inline(data, pos)
            if region is None:
                return None, None, None
            covering = [end for start, end in spans if start < region.start < end]
            if not covering:
                break
            pos = covering[0]
        fragment = self.session.render(region)
        return self.md.htmlStash.store(fragment.markup), region.start, region.end
