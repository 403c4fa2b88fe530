import datetime

from gladest_segments.helpers import escape_markup, make_closing_tag, make_op_close_inline_tag, make_opening_tag

STYLESHEET = """
img.gladest { display: inline-block; }
div.gladest-block { text-align: center; margin: 1em 0; overflow-x: auto; }
span.gladest-inline { white-space: nowrap; }
.gladest-error { color: #b00020; background: #fdecea; border-radius: 3px; padding: 0 0.25em; }
div.gladest-error { display: block; padding: 0.5em; margin: 1em 0; }
"""


class HTMLBuilder:
    def top_part(self, file_name):
        new_file = "<!DOCTYPE html>\n"
        new_file += make_opening_tag("html")
        new_file += make_opening_tag("head")
        new_file += "<meta charset=\"UTF-8\">\n"
        new_file += "<meta name=\"viewport\" content=\"width=device-width, initial-scale=1.0\">\n"
        new_file += make_op_close_inline_tag("title", escape_markup(file_name))
        new_file += make_opening_tag("style")
        new_file += STYLESHEET
        new_file += make_closing_tag("style")
        new_file += make_closing_tag("head")
        new_file += make_opening_tag("body")
        return new_file

    def middle_part(self, file_name, content):
        new_file = make_op_close_inline_tag("h1 class=\"file-title\"", escape_markup(file_name))
        new_file += make_opening_tag("article")
        new_file += content
        new_file += "\n" + make_closing_tag("article")
        return new_file

    def footer(self):
        ret_str = make_opening_tag("footer")
        ret_str += make_op_close_inline_tag("p", "Generated with gladest-markdown")
        ret_str += make_op_close_inline_tag("p", "Last updated on " + datetime.datetime.now().strftime("%m/%d/%Y"))
        ret_str += make_closing_tag("footer")
        return ret_str

    def bottom_part(self):
        new_file = self.footer()
        new_file += make_closing_tag("body")
        new_file += make_closing_tag("html")
        return new_file

    def build_page(self, file_name, content):
        return self.top_part(file_name) + self.middle_part(file_name, content) + self.bottom_part()
