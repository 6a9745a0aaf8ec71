#!/usr/bin/env python3
"""
Live visual check: crawl the configured search URL, open the first request
form, fill it, and leave the browser open for inspection. Never submits.
"""

import asyncio
import sys

from playwright.async_api import async_playwright

from atip_submitter.browser.session import close_browser, launch_browser, new_context
from atip_submitter.crawler import crawl_links
from atip_submitter.data.field_map import FIELD_MAP
from atip_submitter.data.form_data import ConfigError, load_form_data
from atip_submitter.interaction.form import fill_form

INSPECTION_SECONDS = 300


async def live_fill_visual(config_path=None):
    print("Loading configuration...")
    form_data = load_form_data(config_path)

    print(f"Scraping live links from: {form_data['url']}")
    links = await crawl_links(form_data["url"], headless=True, max_pages=1)
    if not links:
        print("⚠️ No links found! Check the URL or search criteria in form_data.json.")
        return

    target_url = links[0]
    print(f"\nTARGET: {target_url}")

    async with async_playwright() as p:
        browser = await launch_browser(p, headless=False)
        try:
            context = await new_context(browser)
            page = await context.new_page()
            await page.goto(target_url, wait_until="domcontentloaded", timeout=60000)

            print("Filling form fields...")
            filled = await fill_form(page, form_data)
            missing = sorted(
                key for key in FIELD_MAP if key not in filled
            )
            if missing:
                print(f"  Not filled (no value configured): {', '.join(missing)}")

            print("\n" + "=" * 80)
            print("*** PAUSED FOR VISUAL INSPECTION - nothing will be submitted ***")
            print(f"Browser stays open for {INSPECTION_SECONDS // 60} minutes. Press Ctrl+C to exit...")
            print("=" * 80)
            await asyncio.sleep(INSPECTION_SECONDS)
        finally:
            await close_browser(browser)


if __name__ == "__main__":
    config_path = sys.argv[1] if len(sys.argv) > 1 else None
    try:
        asyncio.run(live_fill_visual(config_path))
    except ConfigError as e:
        print(f"\n✗ {e}\n")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nExiting...")
