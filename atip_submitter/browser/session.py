"""Browser session management"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from playwright.async_api import Browser, Error as PlaywrightError, Playwright

from atip_submitter.utils.logging import log_info, log_warn

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"


@dataclass(frozen=True)
class LaunchStrategy:
    """One way of starting Chromium; `channel=None` means Playwright's bundled build"""

    name: str
    channel: Optional[str] = None
    args: List[str] = field(
        default_factory=lambda: ["--disable-blink-features=AutomationControlled"]
    )

    def launch_kwargs(self, headless) -> Dict:
        kwargs = {"headless": headless, "args": list(self.args)}
        if self.channel:
            kwargs["channel"] = self.channel
        return kwargs


# Tried in order, first success wins
LAUNCH_STRATEGIES = [
    LaunchStrategy(name="system Chrome", channel="chrome"),
    LaunchStrategy(name="bundled Chromium"),
]


class BrowserRegistry:
    """
    Caller-owned list of open browsers.
    The signal handler in main.py iterates it to close everything on interrupt.
    """

    def __init__(self):
        self._browsers: List[Browser] = []

    def register(self, browser):
        if browser not in self._browsers:
            self._browsers.append(browser)
        return browser

    def unregister(self, browser):
        if browser in self._browsers:
            self._browsers.remove(browser)

    def __len__(self):
        return len(self._browsers)

    async def close_all(self):
        """Close every tracked browser that is still connected"""
        browsers = list(self._browsers)
        self._browsers.clear()
        for browser in browsers:
            if not browser.is_connected():
                continue
            try:
                await browser.close()
            except PlaywrightError as e:
                log_warn(f"Could not close browser cleanly: {e}")


async def launch_browser(
    playwright: Playwright, headless=True, strategies=None, registry=None
) -> Browser:
    """
    Launch Chromium using the first strategy that works.
    Re-raises the last launch error if every strategy fails.
    """
    strategies = strategies or LAUNCH_STRATEGIES
    last_error = None

    for strategy in strategies:
        try:
            browser = await playwright.chromium.launch(
                **strategy.launch_kwargs(headless)
            )
        except PlaywrightError as e:
            last_error = e
            log_info(f"Could not launch {strategy.name}, trying next option...")
            continue

        log_info(f"Launched browser ({strategy.name}, headless={headless})")
        if registry is not None:
            registry.register(browser)
        return browser

    raise last_error or RuntimeError("No browser launch strategies configured")


async def close_browser(browser, registry=None):
    """Close a browser once and drop it from the registry after it has closed"""
    try:
        if browser.is_connected():
            await browser.close()
    except PlaywrightError as e:
        log_warn(f"Error closing browser: {e}")
        return
    if registry is not None:
        registry.unregister(browser)


async def new_context(browser):
    return await browser.new_context(user_agent=USER_AGENT, locale="en-CA")
