"""HTML for the configuration editor"""

import html

SELECT_OPTIONS = {
    "requestor_category": [
        "Member of the Public",
        "Media",
        "Academia",
        "Business",
        "Organization",
    ],
    "delivery_method": ["Electronic Copy", "Paper Copy"],
    "preferred_language": ["English", "French"],
    "consent": ["Yes", "No"],
}

# (field name, label, input type)
TEXT_FIELDS = [
    ("given_name", "Given Name", "text"),
    ("family_name", "Family Name", "text"),
    ("email", "Email Address", "email"),
    ("phone", "Telephone Number", "tel"),
    ("address", "Mailing Address", "text"),
    ("address_2", "Address Line 2 (Optional)", "text"),
    ("city", "City", "text"),
    ("postal_code", "Postal Code", "text"),
    ("state_province", "Province", "text"),
    ("country", "Country", "text"),
]

SELECT_LABELS = {
    "requestor_category": "Requestor Category",
    "delivery_method": "Delivery Method",
    "preferred_language": "Preferred Language",
    "consent": "Consent",
}

DEFAULTS = {"country": "Canada"}

STYLE = """
body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif; background: #f4f7f6; color: #333; display: flex; justify-content: center; padding: 20px; }
.container { background: white; padding: 40px; border-radius: 8px; box-shadow: 0 4px 6px rgba(0,0,0,0.1); max-width: 600px; width: 100%; }
h1 { text-align: center; color: #2c3e50; margin-bottom: 30px; }
.form-group { margin-bottom: 20px; }
label { display: block; margin-bottom: 8px; font-weight: 600; font-size: 0.9em; color: #555; }
input, select, textarea { width: 100%; padding: 10px; border: 1px solid #ddd; border-radius: 4px; font-size: 16px; box-sizing: border-box; }
textarea { resize: vertical; min-height: 80px; }
button { width: 100%; padding: 12px; background: #3498db; color: white; border: none; border-radius: 4px; font-size: 16px; font-weight: bold; cursor: pointer; margin-top: 8px; }
button.live { background: #c0392b; }
button.test { background: #27ae60; }
.message { padding: 15px; border-radius: 4px; margin-bottom: 20px; text-align: center; }
.message.ok { background: #d4edda; color: #155724; }
.message.error { background: #f8d7da; color: #721c24; }
.help { font-size: 0.8em; color: #888; margin-top: 4px; }
.run { border-top: 1px solid #eee; margin-top: 30px; padding-top: 20px; }
.run label.inline { display: inline; font-weight: normal; }
.run input[type=checkbox] { width: auto; }
"""

START_JS = """
async function startRun(mode) {
    const headless = document.getElementById('headless').checked;
    const status = document.getElementById('run-status');
    const resp = await fetch('/start', {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify({mode: mode, headless: headless}),
    });
    const body = await resp.json();
    status.textContent = resp.ok ? 'Run started (' + mode + ')' : (body.detail || 'Could not start run');
}
"""


def _value(data, name):
    value = data.get(name)
    if value in (None, ""):
        value = DEFAULTS.get(name, "")
    return html.escape(str(value), quote=True)


def _select(data, name):
    current = data.get(name, "")
    options = "".join(
        f'<option value="{html.escape(option)}"{" selected" if option == current else ""}>'
        f"{html.escape(option)}</option>"
        for option in SELECT_OPTIONS[name]
    )
    return (
        '<div class="form-group">'
        f'<label for="{name}">{SELECT_LABELS[name]}</label>'
        f'<select id="{name}" name="{name}">{options}</select>'
        "</div>"
    )


def _text(data, name, label, input_type):
    return (
        '<div class="form-group">'
        f'<label for="{name}">{label}</label>'
        f'<input type="{input_type}" id="{name}" name="{name}" value="{_value(data, name)}">'
        "</div>"
    )


def render_config_page(data, message="", error=False):
    message_html = ""
    if message:
        css = "error" if error else "ok"
        message_html = f'<div class="message {css}">{html.escape(message)}</div>'

    fields = [
        _select(data, "requestor_category"),
        _select(data, "delivery_method"),
        *(_text(data, *field) for field in TEXT_FIELDS),
        _select(data, "preferred_language"),
        _select(data, "consent"),
    ]

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>ATIP Submitter Configuration</title>
    <style>{STYLE}</style>
</head>
<body>
    <div class="container">
        <h1>ATIP Configuration Editor</h1>
        {message_html}
        <form method="POST" action="/save">
            <div class="form-group">
                <label for="url">Target URL</label>
                <input type="url" id="url" name="url" value="{_value(data, 'url')}" required placeholder="https://open.canada.ca/en/search/ati?..." pattern="https://.*">
                <div class="help">The search URL from open.canada.ca (must start with https://)</div>
            </div>
            {"".join(fields)}
            <div class="form-group">
                <label for="additional_comments">Additional Comments</label>
                <textarea id="additional_comments" name="additional_comments">{_value(data, 'additional_comments')}</textarea>
            </div>
            <div class="form-group">
                <label for="countdown_seconds">Decision Countdown (seconds)</label>
                <input type="number" id="countdown_seconds" name="countdown_seconds" min="1" max="60" value="{_value(data, 'countdown_seconds')}">
                <div class="help">Time to SKIP or STOP before each form auto-submits (default 5)</div>
            </div>
            <button type="submit">Save Configuration</button>
        </form>
        <div class="run">
            <input type="checkbox" id="headless"> <label class="inline" for="headless">Headless (no browser window, no decision overlay)</label>
            <button class="test" type="button" onclick="startRun('test')">Start Test Run (no submit)</button>
            <button class="live" type="button" onclick="startRun('live')">Start Live Run</button>
            <div id="run-status" class="help"></div>
        </div>
    </div>
    <script>{START_JS}</script>
</body>
</html>
"""
