"""Per-item form transcription state machine

NAV_PENDING -> FORM_READY -> FILLED -> [AWAITING_DECISION] -> SUBMITTED | SKIPPED | DRY_RUN_DONE | STOP -> DONE
any state -> ERROR -> DONE

Every item gets its own page, which is closed on the way out no matter
how the item ended.
"""

import time
from enum import Enum

from playwright.async_api import TimeoutError as PlaywrightTimeout

import atip_submitter.config as config
from atip_submitter.data.field_map import FIELD_MAP
from atip_submitter.data.results import (
    SKIPPED,
    SUBMITTED,
    TEST_SUBMITTED,
    SubmissionResult,
    error_status,
)
from atip_submitter.data.submission_log import append_submitted_url
from atip_submitter.interaction.decision_gate import Decision, await_decision
from atip_submitter.interaction.form import fill_form, submit_form
from atip_submitter.utils.logging import log_error, log_info, log_result
from atip_submitter.utils.timing import format_elapsed_time


class ItemState(Enum):
    NAV_PENDING = "NAV_PENDING"
    FORM_READY = "FORM_READY"
    FILLED = "FILLED"
    AWAITING_DECISION = "AWAITING_DECISION"
    SUBMITTED = "SUBMITTED"
    SKIPPED = "SKIPPED"
    DRY_RUN_DONE = "DRY_RUN_DONE"
    STOP = "STOP"
    ERROR = "ERROR"
    DONE = "DONE"


def _first_line(error):
    lines = str(error).strip().splitlines()
    return lines[0] if lines else type(error).__name__


async def transcribe_item(
    context,
    url,
    form_data,
    dry_run=False,
    interactive=False,
    countdown_seconds=config.DEFAULT_COUNTDOWN_SECONDS,
    field_map=FIELD_MAP,
    log_path=None,
):
    """
    Fill and (maybe) submit the request form at `url`.

    Returns (SubmissionResult, Decision or None). Decision.STOP tells the
    batch to stop after this item; None means no decision was reached.
    """
    start_time = time.time()
    state = ItemState.NAV_PENDING
    decision = None
    status = None
    page = None

    try:
        page = await context.new_page()

        log_info(f"Navigating to: {url}")
        await page.goto(
            url, wait_until="domcontentloaded", timeout=config.NAVIGATION_TIMEOUT
        )
        try:
            await page.wait_for_selector(
                config.FORM_ANCHOR_SELECTOR,
                state="attached",
                timeout=config.FORM_READY_TIMEOUT,
            )
        except PlaywrightTimeout:
            raise PlaywrightTimeout(
                "Request form not found (redirect or error page?)"
            )
        state = ItemState.FORM_READY

        filled = await fill_form(page, form_data, field_map)
        state = ItemState.FILLED
        print(f"  Filled {len(filled)} field(s)")

        if interactive:
            state = ItemState.AWAITING_DECISION
            print(f"  ⏸️  Waiting for decision ({countdown_seconds:g}s until auto-submit)...")
            decision = await await_decision(page, countdown_seconds)
        else:
            decision = Decision.SUBMIT

        if decision is Decision.STOP:
            state = ItemState.STOP
            status = SKIPPED
            print("\n🛑 Batch stopped by operator")
        elif decision is Decision.SKIP:
            state = ItemState.SKIPPED
            status = SKIPPED
        elif dry_run:
            state = ItemState.DRY_RUN_DONE
            status = TEST_SUBMITTED
            print("🧪 Dry run - form filled, submit not clicked")
        else:
            try:
                await submit_form(page)
            except PlaywrightTimeout as e:
                raise PlaywrightTimeout(
                    f"Submission not confirmed (URL did not change): {_first_line(e)}"
                )
            state = ItemState.SUBMITTED
            status = SUBMITTED
            log_info(f"-> Submission successful for: {url}")
            append_submitted_url(url, log_path)

    except Exception as e:
        log_error(f"-> Error during submission of {url} ({state.value}): {_first_line(e)}")
        state = ItemState.ERROR
        status = error_status(_first_line(e))

    finally:
        if page is not None:
            try:
                await page.close()
            except Exception as e:
                log_error(f"Could not close page for {url}: {_first_line(e)}")

    print(f"⏱️  Item time: {format_elapsed_time(time.time() - start_time)}")
    result = SubmissionResult(url=url, status=status)
    log_result(url, result.status, state.value)
    return result, decision
