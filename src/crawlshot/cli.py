"""Command line interface for crawlshot."""

from __future__ import annotations

import argparse
import logging
from importlib.metadata import PackageNotFoundError, version
from typing import List, Optional, Sequence

from .core.artifacts import SeedCrawlResult
from .core.config import (
    DEFAULT_HEIGHT,
    DEFAULT_LEVEL,
    DEFAULT_TABS,
    DEFAULT_WIDTH,
    CaptureOptions,
    ConfigurationError,
    ViewportOptions,
    load_configuration,
)
from .crawl.crawler import run_crawl
from .crawl.link_filter import LinkFilter


def _package_version() -> str:
    try:
        return version("crawlshot")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crawlshot",
        usage="%(prog)s [OPTION]... [URL]...",
        description="Visit pages in a headless browser and save screenshots or PDFs.",
        add_help=False,
    )
    parser.add_argument("urls", nargs="+", metavar="URL", help="Seed URL(s) to start from")
    parser.add_argument("--help", action="help", help="Show this help message and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    parser.add_argument("-q", "--quiet", action="store_true", help="Be quiet")
    parser.add_argument("-t", "--tabs", type=int, default=DEFAULT_TABS, help="Set number of pages")
    parser.add_argument("-s", "--screenshot", action="store_true", help="Take a screenshot")
    parser.add_argument("-p", "--pdf", action="store_true", help="Take a PDF")
    parser.add_argument("-r", "--recursive", action="store_true", help="Recursively visit links")
    parser.add_argument("-l", "--level", type=int, default=DEFAULT_LEVEL, help="Set recursion depth")
    parser.add_argument("-w", "--width", type=int, default=DEFAULT_WIDTH, help="Set page width")
    parser.add_argument("-h", "--height", type=int, default=DEFAULT_HEIGHT, help="Set page height")
    parser.add_argument(
        "-f",
        "--full-page",
        action="store_true",
        help="Take a screenshot of the full scrollable page",
    )
    parser.add_argument("-L", "--relative", action="store_true", help="Follow relative links only")
    parser.add_argument(
        "--device-scale-factor", type=float, default=1, help="Specify device scale factor"
    )
    parser.add_argument("--is-mobile", action="store_true", help="Take meta viewport into account")
    parser.add_argument("--has-touch", action="store_true", help="Support touch events")
    parser.add_argument("--is-landscape", action="store_true", help="Set viewport in landscape mode")
    parser.add_argument("--https-only", action="store_true", help="Follow HTTPS links only")
    parser.add_argument("--same-origin", action="store_true", help="Only visit pages with same origin")
    parser.add_argument("--disable-js", action="store_true", help="Disable javascript")
    parser.add_argument("--user-agent", help="Set user agent")
    parser.add_argument(
        "--pattern",
        help="Only follow links that match the supplied regular expression",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        help="Directory that receives the artifacts (default: current directory)",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Skip pages that fail instead of stopping the tab",
    )
    return parser


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def print_summary(results: List[SeedCrawlResult]) -> None:
    for result in results:
        if result.configuration_error:
            print(f"[!] {result.seed_url}: {result.configuration_error}")
            continue
        marker = "+" if result.succeeded else "!"
        print(
            f"[{marker}] {result.seed_url}: {len(result.visited)} page(s), "
            f"{len(result.artifacts)} artifact(s), {len(result.failures)} failure(s)"
        )


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)

    logging.basicConfig(
        format="%(message)s",
        level=logging.WARNING if args.quiet else logging.INFO,
    )

    try:
        config = load_configuration(
            args.urls,
            output_dir=args.output_dir,
            tabs=args.tabs,
            recursive=args.recursive,
            max_depth=args.level,
            viewport=ViewportOptions(
                width=args.width,
                height=args.height,
                device_scale_factor=args.device_scale_factor,
                is_mobile=args.is_mobile,
                has_touch=args.has_touch,
                is_landscape=args.is_landscape,
            ),
            capture=CaptureOptions(
                screenshot=args.screenshot,
                full_page=args.full_page,
                pdf=args.pdf,
            ),
            link_filter=LinkFilter(
                same_origin=args.same_origin,
                https_only=args.https_only,
                relative_only=args.relative,
                pattern=args.pattern,
            ),
            user_agent=args.user_agent,
            javascript_enabled=not args.disable_js,
            keep_going=args.keep_going,
        )
    except ConfigurationError as exc:
        print(f"[!] {exc}")
        return 1

    if not args.quiet:
        print(f"[*] Crawling {len(config.seed_urls)} seed(s) with {config.tabs} tab(s) each")
        if not config.capture.enabled:
            print("[*] No capture requested (use -s and/or -p)")

    results = run_crawl(config)

    if not args.quiet:
        print_summary(results)

    return 0 if all(result.succeeded for result in results) else 1


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
