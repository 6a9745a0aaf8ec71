"""Submission log (urls.csv) and scraped-results artifact"""

import atip_submitter.config as config
from atip_submitter.utils.logging import log_info, log_warn, log_error


def load_submitted_urls(path=None):
    """
    Load previously submitted URLs as a set.
    Each line's URL is its first comma-delimited field. A missing log is
    created empty; any other read failure is warned and treated as empty.
    """
    path = path or config.SUBMISSION_LOG_FILE
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().split("\n")
    except FileNotFoundError:
        try:
            with open(path, "w", encoding="utf-8"):
                pass
        except OSError as e:
            log_warn(f"Could not create submission log {path}: {e}")
        return set()
    except OSError as e:
        log_warn(f"Could not load submitted URLs from {path}. ({e})")
        return set()

    urls = set()
    for line in lines:
        url = line.strip().split(",")[0].strip()
        if url:
            urls.add(url)
    return urls


def append_submitted_url(url, path=None):
    """Record one submitted URL; failures only warn"""
    path = path or config.SUBMISSION_LOG_FILE
    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(f"{url}\n")
    except OSError as e:
        log_warn(f"Could not log submitted URL to {path}: {e}")


def persist_scraped_links(links, path=None):
    """Overwrite the scraped-results artifact with every discovered link"""
    path = path or config.SCRAPED_RESULTS_FILE
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(links))
        log_info(f"Saved all scraped links to {path}")
    except OSError as e:
        log_error(f"Failed to save scraped links: {e}")
