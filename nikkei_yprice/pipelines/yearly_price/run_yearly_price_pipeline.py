"""Yearly closing price collection pipeline.

Reads a list of company names, resolves each one to a Nikkei stock code,
scrapes its yearly closing prices and writes one CSV row per company.

Usage:
    python -m nikkei_yprice.pipelines.yearly_price.run_yearly_price_pipeline \\
        --input companies.csv --output prices.csv

    # Two header rows, ten concurrent lookups
    nikkei-yprice --input companies.csv --output prices.csv --header 2 --concurrency 10

    # Health check only
    nikkei-yprice --health-check

Notes:
    Output rows are written as lookups finish, not in input order. The
    "index" column holds each company's position in the input file; sort on
    it if order matters.
"""

import argparse
import logging
import queue
import sys
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from nikkei_yprice.ingestion.collectors.stock_code_collector import StockCodeCollector
from nikkei_yprice.ingestion.collectors.yearly_price_collector import YearlyPriceCollector
from nikkei_yprice.ingestion.record_iterator import Record, parse
from nikkei_yprice.ingestion.source_reader import read_text
from nikkei_yprice.pipelines.yearly_price.gate import ConcurrencyGate, GateToken
from nikkei_yprice.pipelines.yearly_price.schema import RunSummary, ScrapeResult
from nikkei_yprice.pipelines.yearly_price.sink import CsvSinkWriter
from nikkei_yprice.shared.config import Config
from nikkei_yprice.shared.errors import RecordFormatError, RunCancelledError, ScraperError
from nikkei_yprice.shared.utils import setup_logger

LOGGER_NAME = "YearlyPricePipeline"


# -----------------------------
# Per-record task
# -----------------------------


def process_record(
    record: Record,
    resolver: StockCodeCollector,
    extractor: YearlyPriceCollector,
    sink: CsvSinkWriter,
    gate: ConcurrencyGate,
    token: GateToken,
    cancel_event: threading.Event,
    logger: logging.Logger,
) -> ScrapeResult:
    """Resolve, extract and write one company. Always releases token.

    A fatal failure sets cancel_event before the gate slot is released, so the
    coordinator sees the abort before it can launch another record.
    """
    try:
        logger.info("%d: %s", record.original_index, record.entity_name)
        result = ScrapeResult(
            entity_name=record.entity_name, original_index=record.original_index
        )

        result.stock_code = resolver.resolve(record.entity_name, cancel_event)
        if result.stock_code:
            result.prices = extractor.extract(result.stock_code, cancel_event)

        sink.write(result)
        return result
    except RunCancelledError:
        raise
    except BaseException:
        cancel_event.set()
        raise
    finally:
        gate.release(token)


# -----------------------------
# Pipeline Runner
# -----------------------------


def run_pipeline(
    input_path: Path | str,
    output_path: Path | str,
    header_skip_count: int | None = None,
    concurrency: int | None = None,
    resolver: StockCodeCollector | None = None,
    extractor: YearlyPriceCollector | None = None,
    logger: logging.Logger | None = None,
) -> RunSummary:
    """Run the whole collection for one input file.

    The input is loaded and decoded before the output file is created. One
    task per record is launched as records are parsed, at most `concurrency`
    at a time. The first fatal error stops new launches, tells running tasks
    to stop before their next request, and is raised once they have drained.
    Rows already written stay in the output file.

    Args:
        input_path: Company list (any encoding, company name in column 0).
        output_path: CSV file to create.
        header_skip_count: Leading rows to skip (default: Config.DEFAULT_HEADER_ROWS).
        concurrency: Maximum tasks in flight (default: Config.DEFAULT_CONCURRENCY).
        resolver: Stock code collector to use (created if omitted).
        extractor: Yearly price collector to use (created if omitted).
        logger: Logger for progress messages.

    Returns:
        RunSummary with launched, written and unresolved counts.

    Raises:
        ScraperError: The first fatal failure of the run.
        ValueError: If concurrency < 1 or header_skip_count < 0.
    """
    if header_skip_count is None:
        header_skip_count = Config.DEFAULT_HEADER_ROWS
    if concurrency is None:
        concurrency = Config.DEFAULT_CONCURRENCY
    if header_skip_count < 0:
        raise ValueError(f"header_skip_count must be >= 0, got {header_skip_count}")
    logger = logger or setup_logger(LOGGER_NAME, level=Config.LOG_LEVEL)

    text = read_text(input_path)

    gate = ConcurrencyGate(concurrency)
    if resolver is None:
        resolver = StockCodeCollector(pool_size=concurrency)
    if extractor is None:
        extractor = YearlyPriceCollector(session=resolver.session)

    cancel_event = threading.Event()
    completed: queue.Queue[Future] = queue.Queue()
    summary = RunSummary()
    iterator_error: RecordFormatError | None = None
    completed_before_iterator_error = 0

    def _on_done(future: Future) -> None:
        completed.put(future)

    logger.info("Collecting yearly prices: %s -> %s", input_path, output_path)
    with CsvSinkWriter(output_path) as sink:
        with ThreadPoolExecutor(
            max_workers=concurrency, thread_name_prefix="yprice"
        ) as executor:
            try:
                for record in parse(text, header_skip_count):
                    if cancel_event.is_set():
                        break
                    try:
                        token = gate.acquire(cancel_event)
                    except RunCancelledError:
                        break

                    try:
                        future = executor.submit(
                            process_record,
                            record,
                            resolver,
                            extractor,
                            sink,
                            gate,
                            token,
                            cancel_event,
                            logger,
                        )
                    except BaseException:
                        gate.release(token)
                        raise
                    future.add_done_callback(_on_done)
                    summary.launched += 1
            except RecordFormatError as e:
                completed_before_iterator_error = completed.qsize()
                iterator_error = e
                cancel_event.set()
                logger.error("Stopping after malformed input: %s", e)
        # executor exit waits for launched tasks
        summary.written = sink.rows_written

    first_error = _first_fatal_error(
        completed, summary, iterator_error, completed_before_iterator_error
    )
    if first_error is not None:
        logger.error(
            "Run aborted after %d/%d rows written: %s",
            summary.written,
            summary.launched,
            first_error,
        )
        raise first_error

    logger.info(
        "Wrote %d rows to %s (%d companies not found)",
        summary.written,
        output_path,
        summary.unresolved,
    )
    return summary


def _first_fatal_error(
    completed: "queue.Queue[Future]",
    summary: RunSummary,
    iterator_error: RecordFormatError | None,
    completed_before_iterator_error: int,
) -> BaseException | None:
    """Walk task outcomes in completion order and pick the error to report.

    Tasks that stopped because of the abort (RunCancelledError) are never the
    cause. A task failure that completed before the iterator failed wins over
    the iterator error.
    """
    first_error: BaseException | None = None
    position = 0
    while True:
        try:
            future = completed.get_nowait()
        except queue.Empty:
            break

        error = future.exception()
        if error is None:
            if not future.result().resolved:
                summary.unresolved += 1
        elif first_error is None and not isinstance(error, RunCancelledError):
            if iterator_error is None or position < completed_before_iterator_error:
                first_error = error
        position += 1

    return first_error or iterator_error


# -----------------------------
# CLI
# -----------------------------


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return number


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="nikkei-yprice",
        description="Scrape yearly closing stock prices of companies from nikkei.com",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--input",
        type=Path,
        help="Input CSV file with company names in the first column",
        metavar="PATH",
    )

    parser.add_argument(
        "--output",
        type=Path,
        help="Output CSV file path",
        metavar="PATH",
    )

    parser.add_argument(
        "--header",
        type=_non_negative_int,
        default=Config.DEFAULT_HEADER_ROWS,
        help=f"Number of header rows to skip. Default: {Config.DEFAULT_HEADER_ROWS}",
        metavar="N",
    )

    parser.add_argument(
        "--concurrency",
        type=_positive_int,
        default=Config.DEFAULT_CONCURRENCY,
        help=f"Maximum concurrent lookups. Default: {Config.DEFAULT_CONCURRENCY}",
        metavar="N",
    )

    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Check that nikkei.com is reachable and exit",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write logs to this file",
        metavar="PATH",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = "DEBUG" if args.verbose else Config.LOG_LEVEL
    logger = setup_logger(LOGGER_NAME, args.log_file, level)

    try:
        Config.validate()
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    resolver = StockCodeCollector(
        pool_size=args.concurrency, log_file=args.log_file, log_level=level
    )
    extractor = YearlyPriceCollector(
        session=resolver.session, log_file=args.log_file, log_level=level
    )

    if args.health_check:
        results = {
            resolver.SOURCE_NAME: resolver.health_check(),
            extractor.SOURCE_NAME: extractor.health_check(),
        }
        for name, ok in results.items():
            logger.info("%s: %s", name, "OK" if ok else "FAILED")
        return 0 if all(results.values()) else 1

    if args.input is None or args.output is None:
        parser.error("--input and --output are required")

    try:
        run_pipeline(
            input_path=args.input,
            output_path=args.output,
            header_skip_count=args.header,
            concurrency=args.concurrency,
            resolver=resolver,
            extractor=extractor,
            logger=logger,
        )
    except ScraperError as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
