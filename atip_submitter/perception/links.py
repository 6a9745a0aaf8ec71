"""Search-results detection: detail links and pager state"""

from urllib.parse import urljoin

import atip_submitter.config as config


async def extract_links_from_page(page, unique_links):
    """
    Add every detail link on the current page to `unique_links` as an
    absolute URL. Returns how many of them were new.
    """
    count_before = len(unique_links)
    anchors = page.locator(config.DETAIL_LINK_SELECTOR)
    anchor_count = await anchors.count()

    for i in range(anchor_count):
        href = await anchors.nth(i).get_attribute("href")
        if href and config.DETAIL_LINK_PATTERN in href:
            unique_links[urljoin(page.url, href)] = None

    return len(unique_links) - count_before


async def detect_next_page(page):
    """
    Locate the pager's "next" control and decide whether to follow it.

    Returns (locator, should_proceed). Pagers signal the end of the list
    in different ways, so any one of these stops the crawl:
    - the control is missing or hidden
    - aria-disabled="true"
    - the enclosing <li> carries the pager__item--last class
    """
    next_link = page.locator(config.NEXT_PAGE_SELECTOR).first

    if not await next_link.is_visible():
        return next_link, False

    if await next_link.get_attribute("aria-disabled") == "true":
        return next_link, False

    parent_class = await next_link.locator("xpath=..").get_attribute("class")
    if parent_class and config.LAST_PAGE_CLASS in parent_class:
        return next_link, False

    return next_link, True
