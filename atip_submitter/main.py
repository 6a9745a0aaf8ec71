#!/usr/bin/env python3
"""
ATIP Submitter - Pipeline Orchestration
Crawl search results -> drop already-submitted links -> submit the rest
"""

import argparse
import asyncio
import signal
import sys
import time
import traceback

import atip_submitter.config as config
from atip_submitter.browser.session import BrowserRegistry
from atip_submitter.crawler import crawl_links
from atip_submitter.data.form_data import load_form_data
from atip_submitter.data.results import ResultLedger
from atip_submitter.data.submission_log import load_submitted_urls, persist_scraped_links
from atip_submitter.submitter import run_batch
from atip_submitter.utils.logging import log_error, log_info, start_run_log
from atip_submitter.utils.timing import format_elapsed_time

MODES = ("test", "live")


def filter_new_links(links, submitted_urls):
    """Links not yet in the submission log, in crawl order"""
    return [link for link in links if link not in submitted_urls]


async def run_pipeline(
    mode="test",
    headless=False,
    interactive=True,
    max_pages=config.DEFAULT_MAX_PAGES,
    config_path=None,
    log_path=None,
    scraped_path=None,
    results_dir=None,
    registry=None,
    crawl=crawl_links,
    submit=run_batch,
):
    """
    Run one full crawl/filter/submit pass.

    Raises ConfigError before any browser is opened when the configuration
    is unusable. Returns the ResultLedger (empty when nothing was new).
    """
    if mode not in MODES:
        raise ValueError(f"Unknown mode {mode!r} (expected one of {', '.join(MODES)})")
    dry_run = mode == "test"

    print("=" * 60)
    print("ATIP Submitter")
    print("=" * 60)
    log_info(f"Mode: {mode.upper()}")

    # 1. Configuration
    form_data = load_form_data(config_path)

    # 2. Crawl
    log_info("Starting link crawler...")
    all_links = await crawl(
        form_data["url"], headless=headless, max_pages=max_pages, registry=registry
    )
    log_info(f"Found {len(all_links)} total unique links.")
    persist_scraped_links(all_links, scraped_path)

    # 3. Filter
    submitted_urls = load_submitted_urls(log_path)
    new_links = filter_new_links(all_links, submitted_urls)
    log_info(
        f"Stats: {len(all_links)} total links, "
        f"{len(all_links) - len(new_links)} previously submitted, "
        f"{len(new_links)} new to process."
    )

    if not new_links:
        log_info("No new links found. Pipeline complete.")
        return ResultLedger()

    # 4. Submit
    ledger = await submit(
        form_data,
        new_links,
        headless=headless,
        dry_run=dry_run,
        interactive=interactive,
        registry=registry,
        log_path=log_path,
        results_dir=results_dir,
    )
    log_info("--- Pipeline finished successfully! ---")
    return ledger


async def run_pipeline_safely(**kwargs):
    """
    Front-end entry point: never raises (except cancellation).
    Failures are logged with their traceback and None is returned.
    """
    start_run_log()
    start_time = time.time()
    try:
        return await run_pipeline(**kwargs)
    except Exception as e:
        log_error("--- FATAL ERROR ---")
        log_error(f"{type(e).__name__}: {e}")
        log_error(traceback.format_exc().rstrip())
        return None
    finally:
        print(f"⏱️  Total time: {format_elapsed_time(time.time() - start_time)}")


def install_signal_handlers(task, registry):
    """Cancel `task` on SIGINT/SIGTERM; the caller closes the registry afterwards"""
    loop = asyncio.get_running_loop()

    def _interrupt(signame):
        print(f"\n🛑 {signame} received - closing {len(registry)} browser(s)...")
        task.cancel()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _interrupt, sig.name)
        except (NotImplementedError, RuntimeError):
            # Windows event loops: Ctrl+C surfaces as KeyboardInterrupt instead
            pass


async def run_cli_pipeline(args):
    registry = BrowserRegistry()
    install_signal_handlers(asyncio.current_task(), registry)
    try:
        ledger = await run_pipeline_safely(
            mode=args.mode,
            headless=args.headless,
            interactive=not args.unattended and not args.headless,
            max_pages=args.max_pages,
            config_path=args.config,
            registry=registry,
        )
    except asyncio.CancelledError:
        print("Interrupted - shutting down.")
        return 130
    finally:
        await registry.close_all()

    return 0 if ledger is not None else 1


def build_parser():
    parser = argparse.ArgumentParser(
        description="ATIP Submitter - crawl ATIP search results and submit request forms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  --mode test       Fill every form but never click submit (default)
  --mode live       Submit for real and record each URL in urls.csv

Examples:
  python -m atip_submitter.main --editor
  python -m atip_submitter.main --mode test
  python -m atip_submitter.main --mode live --unattended
  python -m atip_submitter.main --mode live --headless --speed dev
        """,
    )
    parser.add_argument("--mode", choices=MODES, default="test")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run the browser without a window (implies --unattended)",
    )
    parser.add_argument(
        "--unattended",
        action="store_true",
        help="Skip the SUBMIT/SKIP/STOP decision overlay before each submission",
    )
    parser.add_argument(
        "--max-pages",
        type=int,
        default=config.DEFAULT_MAX_PAGES,
        help=f"Maximum search-result pages to crawl (default {config.DEFAULT_MAX_PAGES})",
    )
    parser.add_argument(
        "--speed",
        choices=["dev", "super"],
        help="Pacing profile: dev (~2x) or super (shortest safe delays)",
    )
    parser.add_argument(
        "--config",
        default=config.CONFIG_FILE,
        help=f"Configuration JSON (default {config.CONFIG_FILE})",
    )
    parser.add_argument(
        "--editor",
        action="store_true",
        help="Start the configuration editor and launch runs from the browser",
    )
    parser.add_argument("--port", type=int, default=config.EDITOR_PORT)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.max_pages < 1:
        parser.error("--max-pages must be at least 1")

    config.apply_speed_mode(args.speed)
    if args.speed:
        print(f"⚡ {args.speed.upper()} pacing profile enabled\n")

    if args.editor:
        from atip_submitter.editor.server import serve_editor

        serve_editor(config_path=args.config, port=args.port, max_pages=args.max_pages)
        return 0

    try:
        return asyncio.run(run_cli_pipeline(args))
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
