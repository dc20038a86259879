"""
Command line front end: turns arguments into a seed URL and `CrawlOptions`,
runs the crawl and prints the report.
"""

import argparse
import logging
import signal
import sys
import threading
from typing import List, Optional, Sequence, Tuple
from urllib.parse import urlsplit

from wordcrawl import config
from wordcrawl.container import Container
from wordcrawl.domain.crawl_options import CrawlOptions
from wordcrawl.exceptions import InvalidOptionsError, InvalidSeedUrlError
from wordcrawl.services.report_printer import print_report

logger = logging.getLogger(__name__)

HELP_ARGUMENT = "help"
EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_INTERRUPTED = 130

USAGE_LINES = (
    "use -d to indicate how many times the crawler needs to recurse",
    "use -p to indicate the amount of parallel threads",
    "use -v to run the crawler in verbose mode",
    "use -limit to specify the time interval to wait between requests",
)


class CrawlArgumentParser(argparse.ArgumentParser):
    """Reports bad flags as `InvalidOptionsError` instead of exiting the process."""

    def error(self, message):
        raise InvalidOptionsError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = CrawlArgumentParser(
        prog="wordcrawl",
        description="Count words and numbers on the pages of a single host",
        epilog="""
Examples:
  wordcrawl example.com
  wordcrawl -d 2 -p 4 https://example.com
  wordcrawl -v -p=10 -d=2 -limit=1000 http://example.com
  wordcrawl help
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("url", nargs="?", help="Seed URL; https:// is assumed when no scheme is given")
    parser.add_argument("-d", dest="max_depth", type=int, default=0, help="Max depth for the crawler to recurse (default: 0)")
    parser.add_argument("-p", dest="parallel", type=int, default=1, help="Amount of parallel requests (default: 1)")
    parser.add_argument("-v", dest="verbose", action="store_true", help="Run the crawler in verbose mode")
    parser.add_argument("-limit", dest="limit_ms", type=int, default=0, help="Milliseconds each worker waits between requests (default: 0)")
    return parser


def resolve_seed_url(raw: str) -> str:
    """Prefix `https://` when no scheme is given and check the URL has a host."""
    url = raw if raw.lower().startswith(("http://", "https://")) else f"https://{raw}"
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidSeedUrlError(raw, str(e)) from e
    if not parts.netloc:
        raise InvalidSeedUrlError(raw, "has no host")
    return url


def parse_args(argv: Sequence[str]) -> Tuple[Optional[str], Optional[CrawlOptions]]:
    """Build the seed URL and options from `argv`.

    Returns (None, None) after printing a message when there is nothing to
    crawl: no arguments, `help`, an unknown flag, or an invalid URL or
    option value.
    """
    argv = list(argv)
    if not argv:
        print("Please provide the URL as first input argument")
        print("Run 'wordcrawl help' for usage")
        return None, None
    if argv[-1] == HELP_ARGUMENT:
        for line in USAGE_LINES:
            print(line)
        return None, None

    try:
        args = build_parser().parse_args(argv)
    except InvalidOptionsError as e:
        print(f"Invalid options: {e}")
        print("Run 'wordcrawl help' for usage")
        return None, None
    if args.url is None:
        print("Please provide the URL as first input argument")
        return None, None

    try:
        url = resolve_seed_url(args.url)
    except InvalidSeedUrlError as e:
        print(f"Invalid URL provided: {e}")
        return None, None

    try:
        options = CrawlOptions(
            parallel=args.parallel,
            max_depth=args.max_depth,
            limit=args.limit_ms / 1000,
            verbose=args.verbose,
            deadline=config.get_optional_float_env("WORDCRAWL_DEADLINE_SECONDS"),
        )
    except ValueError as e:
        print(f"Invalid options: {e}")
        return None, None
    return url, options


def setup_logging(verbose: bool) -> None:
    # stderr only; stdout carries the report
    logging.basicConfig(
        level=getattr(logging, config.log_level(verbose), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def main(argv: Optional[List[str]] = None, container=None) -> int:
    """Main entry point for the CLI application."""
    argv = sys.argv[1:] if argv is None else list(argv)
    url, options = parse_args(argv)
    if url is None:
        return EXIT_OK if argv and argv[-1] == HELP_ARGUMENT else EXIT_CONFIG_ERROR

    setup_logging(options.verbose)
    if container is None:
        container = Container()
    engine = container.crawl_engine(options=options)

    stop_event = threading.Event()
    interrupted = threading.Event()

    def handle_sigint(signum, frame):
        logger.warning("Received signal %s, stopping crawl", signum)
        interrupted.set()
        stop_event.set()

    previous_handler = signal.signal(signal.SIGINT, handle_sigint)
    try:
        result = engine.crawl(url, stop_event=stop_event)
    except InvalidSeedUrlError as e:
        print(f"Invalid URL provided: {e}")
        return EXIT_CONFIG_ERROR
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    print_report(result, url, options)
    if interrupted.is_set():
        return EXIT_INTERRUPTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
