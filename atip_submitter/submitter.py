"""
Batch submitter - runs the transcriber over new links, one at a time
"""

from playwright.async_api import async_playwright

from atip_submitter.browser.session import close_browser, launch_browser, new_context
from atip_submitter.data.form_data import get_countdown_seconds
from atip_submitter.data.results import ResultLedger
from atip_submitter.interaction.decision_gate import Decision
from atip_submitter.state.transcriber import transcribe_item
from atip_submitter.utils.logging import log_info, log_warn
from atip_submitter.utils.summary import print_summary, show_summary, write_results_csv
from atip_submitter.utils.timing import pace


async def run_batch(
    form_data,
    links,
    headless=False,
    dry_run=False,
    interactive=True,
    registry=None,
    log_path=None,
    results_dir=None,
    playwright=None,
):
    """
    Submit `links` sequentially in one browser/context, one page per item.

    Stops early when the operator picks STOP. Returns the ResultLedger.
    """
    if playwright is None:
        async with async_playwright() as p:
            return await run_batch(
                form_data,
                links,
                headless=headless,
                dry_run=dry_run,
                interactive=interactive,
                registry=registry,
                log_path=log_path,
                results_dir=results_dir,
                playwright=p,
            )

    ledger = ResultLedger()
    countdown_seconds = get_countdown_seconds(form_data)

    browser = await launch_browser(playwright, headless=headless, registry=registry)
    try:
        context = await new_context(browser)
        log_info(f"Starting submission of {len(links)} new ATIP links...")

        for index, link in enumerate(links, 1):
            print("\n" + "=" * 60)
            print(f"LINK {index}/{len(links)}")
            print("=" * 60)

            result, decision = await transcribe_item(
                context,
                link,
                form_data,
                dry_run=dry_run,
                interactive=interactive,
                countdown_seconds=countdown_seconds,
                log_path=log_path,
            )
            if result is not None:
                ledger.append(result)

            if decision is Decision.STOP:
                log_info(
                    f"Stopped by operator - {len(links) - index} link(s) left unprocessed"
                )
                break

            if index < len(links):
                await pace("item")

        if ledger:
            print_summary(ledger)
            try:
                csv_filename = write_results_csv(ledger, results_dir)
                print(f"\n📊 CSV summary written to: {csv_filename}")
            except OSError as e:
                log_warn(f"Could not write CSV summary: {e}")
            if headless:
                log_info("Headless run - summary page not shown")
            else:
                await show_summary(context, ledger)
    finally:
        print("\nClosing browser...")
        await close_browser(browser, registry)

    return ledger
