"""Run summary - CSV record plus an HTML page the operator dismisses"""

import csv
import html
import os
from datetime import datetime

from playwright.async_api import Error as PlaywrightError

import atip_submitter.config as config
from atip_submitter.data.results import STATUS_ORDER

SUMMARY_STYLE = """
body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif; background: #f4f7f6; color: #333; padding: 20px; }
.container { background: white; padding: 30px; border-radius: 8px; box-shadow: 0 4px 6px rgba(0,0,0,0.1); max-width: 1000px; margin: 0 auto; }
h1 { color: #2c3e50; }
table { width: 100%; border-collapse: collapse; margin: 20px 0; }
th, td { text-align: left; padding: 8px; border-bottom: 1px solid #ddd; font-size: 0.9em; word-break: break-all; }
.status-submitted { color: #155724; font-weight: bold; }
.status-test_submitted { color: #0c5460; font-weight: bold; }
.status-skipped { color: #856404; }
.status-error { color: #721c24; font-weight: bold; }
.counts span { margin-right: 16px; }
button { padding: 12px 24px; background: #3498db; color: white; border: none; border-radius: 4px; font-size: 16px; cursor: pointer; }
"""

# Resolves once the operator presses "Close"
WAIT_FOR_DISMISS_JS = """
() => new Promise((resolve) => {
    document.getElementById('close-summary').addEventListener('click', () => resolve(true));
})
"""


def render_summary_html(ledger):
    counts = ledger.counts()
    count_parts = "".join(
        f'<span class="status-{status.lower()}">{status}: {counts[status]}</span>'
        for status in STATUS_ORDER
        if counts[status]
    )

    rows = []
    for result in ledger:
        rows.append(
            "<tr>"
            f'<td><a href="{html.escape(result.url)}">{html.escape(result.url)}</a></td>'
            f"<td>{result.timestamp.isoformat(timespec='seconds')}</td>"
            f'<td class="status-{result.base_status.lower()}">{html.escape(result.status)}</td>'
            "</tr>"
        )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>ATIP Submission Summary</title>
    <style>{SUMMARY_STYLE}</style>
</head>
<body>
    <div class="container">
        <h1>ATIP Submission Summary</h1>
        <p class="counts">Processed {len(ledger)} link(s): {count_parts}</p>
        <table>
            <thead><tr><th>URL</th><th>Timestamp</th><th>Status</th></tr></thead>
            <tbody>
{"".join(rows)}
            </tbody>
        </table>
        <button id="close-summary" type="button">Close</button>
    </div>
</body>
</html>
"""


def write_results_csv(ledger, directory=None):
    """Write the ledger to results/submission_results_<timestamp>.csv"""
    directory = directory or config.RESULTS_DIR
    os.makedirs(directory, exist_ok=True)

    csv_filename = os.path.join(
        directory,
        f"submission_results_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv",
    )
    with open(csv_filename, "w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=["url", "timestamp", "status"])
        writer.writeheader()
        for result in ledger:
            writer.writerow(
                {
                    "url": result.url,
                    "timestamp": result.timestamp.isoformat(),
                    "status": result.status,
                }
            )
    return csv_filename


def print_summary(ledger):
    counts = ledger.counts()
    print("\n" + "=" * 60)
    print("BATCH COMPLETE")
    print("=" * 60)
    print(f"\nProcessed {len(ledger)} links:")
    for status in STATUS_ORDER:
        if counts[status] > 0:
            print(f"  {status}: {counts[status]}")


async def show_summary(context, ledger):
    """Open the summary in a new tab and block until the operator dismisses it"""
    page = await context.new_page()
    try:
        await page.set_content(render_summary_html(ledger))
        print("\n📋 Summary open in browser - press Close (or close the tab) to finish")
        await page.evaluate(WAIT_FOR_DISMISS_JS)
    except PlaywrightError:
        # Closing the tab is also a dismissal
        pass
    finally:
        if not page.is_closed():
            await page.close()
