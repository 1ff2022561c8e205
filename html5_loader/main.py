#!/usr/bin/env python3
"""
html5-loader - Command line entry point

Loads an HTML5 document or fragment and prints it, its structure, or the
result of a node-set query or CSS selector.
"""

import sys
import argparse
from typing import List, Optional

from cssselect import SelectorError

from html5_loader import __version__
from html5_loader.dom import Attr, Node, XPathError
from html5_loader.loader import Loader, LoaderError, Result
from html5_loader.utils.config import Config
from html5_loader.utils.logging import setup_logging, get_default_log_file, log_exception


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="html5-loader - load HTML5 documents and fragments")

    parser.add_argument("source", help="File to load, literal markup, or '-' to read markup from stdin")
    parser.add_argument("--content-type", default="html5", help="Content type to load as (default: html5)")
    parser.add_argument("--fragment", action="store_true", help="Load the source as a fragment")
    parser.add_argument("--disable-html-ns", action="store_true",
                        help="Do not put HTML elements into the XHTML namespace")
    parser.add_argument("--xpath", metavar="EXPR", help="Print the result of an XPath expression")
    parser.add_argument("--select", metavar="CSS", help="Print the elements matching a CSS selector")
    parser.add_argument("--structure", action="store_true", help="Print the document structure")
    parser.add_argument("--config", metavar="PATH", default=None, help="Configuration file to use")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"html5-loader {__version__}")

    return parser.parse_args(argv)


def print_xpath_result(document, result) -> None:
    """Print selected nodes as HTML, attributes by value and other results as they are."""
    if not isinstance(result, list):
        print(result)
        return
    for item in result:
        if isinstance(item, Node):
            print(document.save_html(item))
        elif isinstance(item, Attr):
            print(item.value)
        else:
            print(item)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line tool."""
    args = parse_args(argv)

    try:
        config = Config(args.config)
    except (ValueError, OSError) as e:
        logger = setup_logging(console_level="DEBUG" if args.debug else "INFO")
        logger.error(f"Invalid configuration: {e}")
        return 1

    logging_config = config.get("logging", {})
    logger = setup_logging(
        log_file=get_default_log_file() if logging_config.get("log_to_file") else None,
        console_level="DEBUG" if args.debug else logging_config.get("console_level", "INFO"),
        file_level=logging_config.get("file_level", "DEBUG"),
        colored=logging_config.get("colored", True),
    )

    options = {"allow_file": True}
    if args.disable_html_ns:
        options["disable_html_ns"] = True

    source = args.source
    if source == "-":
        source = sys.stdin.read()
        options["is_string"] = True

    content_type = args.content_type
    if args.fragment:
        options["is_fragment"] = True

    loader = Loader(config=config)

    try:
        loaded = loader.load(source, content_type, options)

        if isinstance(loaded, Result):
            document = loaded.document
            nodes = list(loaded.nodes)
        else:
            document = loaded
            nodes = None

        if args.structure:
            print(document.debug_structure())
        elif args.xpath:
            print_xpath_result(document, document.evaluate(args.xpath))
        elif args.select:
            for element in document.query_selector_all(args.select):
                print(element.outer_html)
        else:
            print(document.save_html(nodes))
    except (LoaderError, XPathError, SelectorError, OSError) as e:
        if args.debug:
            log_exception(logger, e, "Loading failed")
        else:
            logger.error(f"Loading failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
