"""Interactive decision gate shown over a filled form before submission"""

import asyncio
from enum import Enum

import atip_submitter.config as config


class Decision(Enum):
    SUBMIT = "SUBMIT"
    SKIP = "SKIP"
    STOP = "STOP"


# Resolves with the button the operator pressed, or SUBMIT when the
# countdown runs out. The overlay removes itself before resolving.
OVERLAY_JS = """
(seconds) => new Promise((resolve) => {
    const old = document.getElementById('atip-decision-overlay');
    if (old) old.remove();

    const overlay = document.createElement('div');
    overlay.id = 'atip-decision-overlay';
    overlay.style.cssText = 'position:fixed;top:16px;right:16px;z-index:2147483647;' +
        'background:#fff;border:2px solid #2c3e50;border-radius:8px;padding:16px;' +
        'font:14px -apple-system,Segoe UI,Roboto,Arial,sans-serif;' +
        'box-shadow:0 4px 12px rgba(0,0,0,0.3);min-width:260px;';

    const label = document.createElement('div');
    label.style.marginBottom = '12px';
    overlay.appendChild(label);

    let remaining = Math.ceil(seconds);
    const render = () => { label.textContent = 'Submitting in ' + remaining + 's...'; };
    render();

    let timer = null;
    const finish = (choice) => {
        clearInterval(timer);
        overlay.remove();
        resolve(choice);
    };

    const buttons = [
        ['SUBMIT', 'Submit now', '#27ae60'],
        ['SKIP', 'Skip this item', '#f39c12'],
        ['STOP', 'Stop the batch', '#c0392b'],
    ];
    for (const [choice, text, color] of buttons) {
        const btn = document.createElement('button');
        btn.type = 'button';
        btn.dataset.choice = choice;
        btn.textContent = text;
        btn.style.cssText = 'margin-right:6px;padding:6px 10px;border:none;' +
            'border-radius:4px;color:#fff;cursor:pointer;background:' + color;
        btn.addEventListener('click', (e) => { e.preventDefault(); finish(choice); });
        overlay.appendChild(btn);
    }

    document.body.appendChild(overlay);

    timer = setInterval(() => {
        remaining -= 1;
        if (remaining <= 0) {
            finish('SUBMIT');
        } else {
            render();
        }
    }, 1000);
})
"""

# Slack on top of the in-page countdown before Python stops waiting
_GRACE_SECONDS = 2


async def await_decision(page, countdown_seconds=config.DEFAULT_COUNTDOWN_SECONDS):
    """
    Show the overlay and wait for SUBMIT / SKIP / STOP.

    The in-page promise is raced against a timer so a page that never
    answers (frozen script, blocked timers) still resolves to SUBMIT.
    """
    try:
        choice = await asyncio.wait_for(
            page.evaluate(OVERLAY_JS, countdown_seconds),
            timeout=countdown_seconds + _GRACE_SECONDS,
        )
    except asyncio.TimeoutError:
        return Decision.SUBMIT

    try:
        return Decision(choice)
    except ValueError:
        return Decision.SUBMIT
