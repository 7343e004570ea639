"""
cache-explain: print the cacheability explanation for captured exchanges.

Each input file holds one exchange as JSON or YAML:

    method: GET
    url: /assets/app.js
    statusCode: 200
    responseHeaders:
      cache-control: max-age=31536000
      date: Fri, 22 Mar 2019 11:54:00 GMT
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .config import get_cli_settings
from .explainer import explain_cacheability
from .loader import ExchangeLoadError, load_exchange
from .types import CacheabilityResult, Severity

logger = logging.getLogger(__name__)

SEVERITY_STYLES = {
    Severity.WARNING: "bold yellow",
    Severity.SUGGESTION: "bold cyan",
    None: "bold green",
}


def build_parser() -> argparse.ArgumentParser:
    settings = get_cli_settings()
    parser = argparse.ArgumentParser(
        prog="cache-explain",
        description="Explain whether an HTTP response would be cached, and why",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Exchange documents (JSON or YAML). Reads stdin when omitted or '-'",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=settings.output == "json",
        help="Print results as JSON instead of panels",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})",
    )
    return parser


def print_result(console: Console, source: str, result: CacheabilityResult) -> None:
    style = SEVERITY_STYLES[result.type]
    subtitle = result.type.value if result.type else None
    console.print(
        Panel(
            Text(result.explanation),
            title=f"[{style}]{result.summary.value}[/{style}]",
            subtitle=subtitle,
            subtitle_align="right",
        ),
    )
    console.print(Text(source, style="dim"))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    sources = args.files or ["-"]
    results = []
    for source in sources:
        try:
            exchange = load_exchange(source, stream=sys.stdin)
        except ExchangeLoadError as e:
            logger.error(str(e))
            return 2
        results.append((source, explain_cacheability(exchange)))

    if args.json:
        payload = [dict(source=source, **result.to_dict()) for source, result in results]
        print(json.dumps(payload if len(payload) > 1 else payload[0], indent=2))
        return 0

    console = Console(width=get_cli_settings().width)
    for source, result in results:
        print_result(console, "<stdin>" if source == "-" else source, result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
