"""Form filling and submission"""

import atip_submitter.config as config
from atip_submitter.data.field_map import FIELD_MAP, FieldKind


class SubmitError(Exception):
    """The submit control could not be used or navigation never happened"""


async def fill_form(page, form_data, field_map=FIELD_MAP):
    """
    Fill every mapped field that has a non-empty value.

    SELECT fields pick the option whose visible label equals the value
    exactly; Playwright raises if no option matches. Keys without a locator
    are ignored. Returns the list of field names filled.
    """
    filled = []
    for key, value in form_data.items():
        locator = field_map.get(key)
        if locator is None or value in (None, ""):
            continue

        value = str(value)
        if locator.kind is FieldKind.SELECT:
            await page.select_option(locator.selector, label=value)
        else:
            await page.fill(locator.selector, value)

        filled.append(key)
        print(f"  ✓ Filled {key}: {value}")

    return filled


async def submit_form(page, timeout=config.SUBMIT_NAVIGATION_TIMEOUT):
    """
    Click submit and wait for the URL to change.
    A URL change is the only accepted proof that the submission went through.
    """
    submit_button = page.locator(config.SUBMIT_BUTTON_SELECTOR).first
    if not await submit_button.is_visible():
        raise SubmitError("Submit button not visible")

    url_before = page.url
    await submit_button.click()
    print("-> Clicked Submit button.")

    await page.wait_for_url(
        lambda url: url != url_before, wait_until="domcontentloaded", timeout=timeout
    )
    return page.url
