import argparse
import logging
import os
import sys

from tqdm import tqdm

from gladest_segments.FileManager import FileManager
from gladest_segments.HtexProcessor import HtexProcessor
from gladest_segments.MarkdownProcessor.MarkdownProcessor import MarkdownProcessor
from gladest_segments.RenderOptions import load_config
from gladest_segments.errors import ConfigurationError
from gladest_segments.html_builders.HTMLBuilder import HTMLBuilder

logger = logging.getLogger("gladest")


class GladestMarkdown:
    def __init__(self, in_path, out_directory, renderer=None, **math_config):
        if not os.path.exists(in_path):
            raise ValueError(f"Input path does not exist: {in_path}")

        self.in_path = os.path.abspath(in_path)
        self.out_directory = os.path.abspath(out_directory)

        if renderer is not None:
            math_config['renderer'] = renderer
        self.MarkdownProcessor = MarkdownProcessor(**math_config)
        self.HtexProcessor = HtexProcessor(self.MarkdownProcessor.session)
        self.HTMLBuilder = HTMLBuilder()
        self.FileManager = FileManager(self.in_path, self.out_directory)
        self.files = self.FileManager.add_dirs_to_list()

    def convert_file(self, source):
        text = self.FileManager.read_raw(source)
        if source.suffix.lower() == ".htex":
            return self.HtexProcessor.process(text)
        content = self.MarkdownProcessor.process_markdown(text)
        return self.HTMLBuilder.build_page(source.stem, content)

    def compile_webpages(self, progress=False):
        """Convert every collected file, returning the number of files that failed"""
        failed = 0
        for source in tqdm(self.files, unit="file", disable=not progress):
            output_path = self.FileManager.output_path(source)
            try:
                self.FileManager.writeToFile(output_path, self.convert_file(source))
            except OSError as e:
                logger.error("Error processing file %s: %s", source, e)
                failed += 1
            else:
                logger.debug("Wrote %s", output_path)

        logger.info("Compiled %d of %d files into %s", len(self.files) - failed, len(self.files), self.out_directory)
        return failed


def build_arg_parser():
    parser = argparse.ArgumentParser(
        prog="gladest-markdown",
        description="Render $...$ and $$...$$ math in Markdown and HTEX files into self-contained HTML.",
    )
    parser.add_argument("input", help="Markdown/HTEX file or directory")
    parser.add_argument("-o", "--output", default="output", help="Output directory (default: ./output)")
    parser.add_argument("-f", "--format", choices=["svg", "png"], help="Image format (default: svg)")
    parser.add_argument("-p", "--ppi", type=float, help="Pixels per inch for png output")
    parser.add_argument("-c", "--config", help="YAML configuration file (format, ppi, fonts)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_config(args.config) if args.config else {}
        if args.format:
            settings["format"] = args.format
        if args.ppi is not None:
            settings["ppi"] = args.ppi
        elif "ppi" not in settings and "resolution" in settings:
            settings["ppi"] = settings["resolution"]
        math_config = {key: settings[key] for key in ("format", "ppi", "fonts") if key in settings}
        converter = GladestMarkdown(args.input, args.output, **math_config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2

    failed = converter.compile_webpages(progress=sys.stderr.isatty())
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
