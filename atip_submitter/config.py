"""Configuration and timing profiles for ATIP crawl/submit automation"""

# ========================================
# SPEED MODE CONFIGURATION
# ========================================
# Choose one mode (set all others to False):
# - DEV_TEST_SPEED: ~2x faster pacing, for local runs against test listings
# - SUPER_DEV_SPEED: shortest pacing that still looks human
# - Production: All False (default, most polite to the target site)

DEV_TEST_SPEED = False
SUPER_DEV_SPEED = False

# ========================================
# TIMING PROFILES
# ========================================
# All delays are in milliseconds (ms)
# Each delay is randomized via human_delay()

TIMING_PROFILES = {
    "default": {
        # Crawl pacing (before/after pager clicks, after first load)
        "page_delay_min": 1000,
        "page_delay_max": 3000,
        # Pause between two submissions in a batch
        "item_delay_min": 2000,
        "item_delay_max": 5000,
    },
    "dev_test": {
        "page_delay_min": 500,
        "page_delay_max": 1500,
        "item_delay_min": 1000,
        "item_delay_max": 2500,
    },
    "super_dev": {
        "page_delay_min": 250,  # Absolute floor
        "page_delay_max": 600,
        "item_delay_min": 500,
        "item_delay_max": 1000,
    },
}

# ========================================
# SAFETY VALIDATIONS
# ========================================
_MIN_PAGE_DELAY_MS = 250
_MIN_ITEM_DELAY_MS = 500


def get_active_timing():
    """Get the active timing profile based on current speed mode settings"""
    if SUPER_DEV_SPEED:
        return TIMING_PROFILES["super_dev"]
    elif DEV_TEST_SPEED:
        return TIMING_PROFILES["dev_test"]
    else:
        return TIMING_PROFILES["default"]


def find_timing_violations(timing):
    """Return human-readable violations of the minimum pacing floors"""
    violations = []
    for key, value in timing.items():
        if key.startswith("page_") and value < _MIN_PAGE_DELAY_MS:
            violations.append(f"{key}={value}ms < {_MIN_PAGE_DELAY_MS}ms minimum")
        if key.startswith("item_") and value < _MIN_ITEM_DELAY_MS:
            violations.append(f"{key}={value}ms < {_MIN_ITEM_DELAY_MS}ms minimum")
    return violations


def apply_speed_mode(speed=None):
    """
    Switch the active profile (None, "dev" or "super") and rebuild TIMING.
    Falls back to the default profile if the chosen one breaks a floor.
    """
    global DEV_TEST_SPEED, SUPER_DEV_SPEED, TIMING

    DEV_TEST_SPEED = speed == "dev"
    SUPER_DEV_SPEED = speed == "super"
    TIMING = get_active_timing()

    violations = find_timing_violations(TIMING)
    if violations:
        print("⚠️ TIMING PROFILE VIOLATIONS - Falling back to default profile:")
        for violation in violations:
            print(f"  - {violation}")
        DEV_TEST_SPEED = False
        SUPER_DEV_SPEED = False
        TIMING = TIMING_PROFILES["default"]

    return TIMING


TIMING = get_active_timing()

# ========================================
# TIMEOUTS (ms)
# ========================================
NAVIGATION_TIMEOUT = 30000
FIRST_RESULTS_TIMEOUT = 15000
FORM_READY_TIMEOUT = 15000
SUBMIT_NAVIGATION_TIMEOUT = 30000

DEFAULT_MAX_PAGES = 100
DEFAULT_COUNTDOWN_SECONDS = 5

# ========================================
# SELECTORS
# ========================================
DETAIL_LINK_PATTERN = "/en/search/ati/reference/"
DETAIL_LINK_SELECTOR = f"a[href*='{DETAIL_LINK_PATTERN}']"
NEXT_PAGE_SELECTOR = "li.pager__item--next > a"
LAST_PAGE_CLASS = "pager__item--last"

# The submit button doubles as the "this is a real request form" anchor
FORM_ANCHOR_SELECTOR = "#edit-actions-submit"
SUBMIT_BUTTON_SELECTOR = "#edit-actions-submit"

# ========================================
# FILES
# ========================================
CONFIG_FILE = "form_data.json"
SUBMISSION_LOG_FILE = "urls.csv"
SCRAPED_RESULTS_FILE = "scraped_results.csv"
RUN_LOG_FILE = "latest.log"
RESULT_LOG_FILE = "log.jsonl"
RESULTS_DIR = "results"

# ========================================
# CONFIG EDITOR
# ========================================
EDITOR_HOST = "127.0.0.1"
EDITOR_PORT = 3000
