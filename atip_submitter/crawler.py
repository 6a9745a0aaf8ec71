"""
Link crawler - walks the ATIP search-results pager and collects detail links
"""

from playwright.async_api import TimeoutError as PlaywrightTimeout, async_playwright

import atip_submitter.config as config
from atip_submitter.browser.session import close_browser, launch_browser
from atip_submitter.perception.links import detect_next_page, extract_links_from_page
from atip_submitter.utils.logging import log_error, log_info, log_warn
from atip_submitter.utils.timing import pace


async def scrape_pages(page, seed_url, max_pages=config.DEFAULT_MAX_PAGES):
    """
    Crawl the listing starting at `seed_url` using an already-open page.

    Returns the unique detail links in discovery order. Errors inside the
    loop are logged and the links found so far are returned.
    """
    unique_links = {}

    try:
        log_info(f"Navigating to {seed_url}...")
        await page.goto(
            seed_url, wait_until="domcontentloaded", timeout=config.NAVIGATION_TIMEOUT
        )

        # Initial wait to look human
        await pace("page")

        try:
            await page.wait_for_selector(
                config.DETAIL_LINK_SELECTOR, timeout=config.FIRST_RESULTS_TIMEOUT
            )
        except PlaywrightTimeout:
            log_warn("No results found on the first page. Checking content...")

        page_num = 1
        while True:
            found = await extract_links_from_page(page, unique_links)
            log_info(
                f"Page {page_num}: Found {found} new links. (Total: {len(unique_links)})"
            )

            next_link, should_proceed = await detect_next_page(page)
            if not should_proceed:
                log_info("No next page button or end of pagination reached.")
                break

            if page_num >= max_pages:
                log_warn(
                    f"Reached page cap ({max_pages}) - stopping crawl with "
                    f"{len(unique_links)} links"
                )
                break

            await pace("page")
            await next_link.click()
            await page.wait_for_load_state("domcontentloaded")
            await pace("page")
            page_num += 1

    except Exception as e:
        log_error(f"An error occurred during scraping: {e}")

    return list(unique_links)


async def crawl_links(
    seed_url,
    headless=True,
    max_pages=config.DEFAULT_MAX_PAGES,
    registry=None,
    playwright=None,
):
    """
    Launch a browser, crawl the listing, and always close the browser.
    Browser launch failures propagate; crawl failures return partial links.
    """
    if playwright is None:
        async with async_playwright() as p:
            return await crawl_links(
                seed_url,
                headless=headless,
                max_pages=max_pages,
                registry=registry,
                playwright=p,
            )

    browser = await launch_browser(playwright, headless=headless, registry=registry)
    try:
        page = await browser.new_page()
        return await scrape_pages(page, seed_url, max_pages=max_pages)
    finally:
        await close_browser(browser, registry)
