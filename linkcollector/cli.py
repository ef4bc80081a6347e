import argparse
import logging
import sys
from typing import Optional, Sequence

from linkcollector import config as env
from linkcollector.collector import collect
from linkcollector.exceptions import LinkCollectorError
from linkcollector.logging_setup import LOG_LEVELS, configure_logging
from linkcollector.services.config_file_store import ConfigFileStore
from linkcollector.services.crawl_request_parser import CrawlRequestParser
from linkcollector.services.presets import available_presets
from linkcollector.services.result_formatter import available_formats, format_result

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    # Defaults stay None so values from --config-file are only overridden by explicit flags.
    parser = argparse.ArgumentParser(
        prog="linkcollector",
        description="Recursively collect links from a starting URL and output JSON or text results.",
    )
    parser.add_argument("--initial-url", dest="initialUrl", help="The starting URL for link collection")
    parser.add_argument("--depth", type=int, choices=range(0, 6), help=f"Maximum recursion depth, 0-5 (default: {env.DEFAULT_DEPTH})")
    parser.add_argument("--filters", help='JSON filter conditions, e.g. \'[{"domain": "example.com"}]\'')
    parser.add_argument("--filters-file", dest="filtersFile", help="JSON or YAML file with filter conditions")
    parser.add_argument("--preset", choices=available_presets(), help="Named filter preset to add")
    parser.add_argument("--selector", help="CSS selector limiting link extraction on the initial page")
    parser.add_argument("--element", help="Tag name limiting link extraction on the initial page (e.g. main, article)")
    parser.add_argument("--delay-ms", dest="delayMs", type=int, help=f"Delay before each request in ms (default: {env.CRAWL_DELAY_MS})")
    parser.add_argument("--log-level", dest="logLevel", choices=[k for k in LOG_LEVELS if k != "warning"], help=f"Logging level (default: {env.LOG_LEVEL})")
    parser.add_argument("--output", help="Output file path (default: stdout)")
    parser.add_argument("--format", choices=available_formats(), help="Output format (default: json)")
    parser.add_argument("--config-file", dest="configFile", help="JSON or YAML configuration file")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the link collector CLI."""
    args = vars(build_parser().parse_args(argv))
    config_file = args.pop("configFile")

    store = ConfigFileStore()
    file_values = {}
    if config_file:
        try:
            file_values = store.load_dict(config_file)
        except LinkCollectorError as e:
            configure_logging(args.get("logLevel") or env.LOG_LEVEL)
            logger.error("Failed to load configuration file: %s", e)
            return 1

    request_parser = CrawlRequestParser(file_store=store)
    values = request_parser.merge(args, file_values)
    try:
        configure_logging(values.get("logLevel") or env.LOG_LEVEL)
    except ValueError as e:
        configure_logging(env.LOG_LEVEL)
        logger.error("%s", e)
        return 1
    if config_file:
        logger.info("Loaded configuration from file: %s", config_file)

    if not values.get("initialUrl"):
        logger.error("initialUrl is required. Provide it via --initial-url or in the config file.")
        return 1

    try:
        request = request_parser.parse(args, file_values)
    except LinkCollectorError as e:
        logger.error("%s", e)
        return 1

    result = collect(request)

    try:
        output = format_result(result, values.get("format") or "json")
    except LinkCollectorError as e:
        logger.error("%s", e)
        return 1

    if values.get("output"):
        logger.info("Writing results to file: %s", values["output"])
        try:
            with open(values["output"], "w", encoding="utf-8") as f:
                f.write(output)
        except OSError as e:
            logger.error("Failed to write results to %s: %s", values["output"], e)
            return 1
    else:
        sys.stdout.write(output)
        if not output.endswith("\n"):
            sys.stdout.write("\n")

    logger.info("Link collection completed successfully")
    return 0
