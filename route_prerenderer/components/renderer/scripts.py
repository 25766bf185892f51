"""
JavaScript evaluated inside rendered pages.

Init scripts (`page.add_init_script`) run before any page script, so they are
used for value injection and for recording a document event that may fire
before the readiness wait is attached.
"""
import json
from typing import Any

STATUS_PROPERTY = "__PRERENDER_STATUS"
EVENT_RESOLVED_FLAG = "__DOCUMENT_EVENT_RESOLVED"

LOCATION_PATHNAME = "window.location.pathname"


def injection_script(prop: str, value: Any) -> str:
    """Init script exposing `value` as `window[prop]`."""
    return f"(function () {{ window[{json.dumps(prop)}] = {json.dumps(value)}; }})();"


def document_event_flag_script(event: str) -> str:
    """Init script that sets the resolved flag once `event` fires on the document."""
    return (
        "(function () {"
        f" window[{json.dumps(STATUS_PROPERTY)}] = {{}};"
        f" document.addEventListener({json.dumps(event)}, function () {{"
        f" window[{json.dumps(STATUS_PROPERTY)}][{json.dumps(EVENT_RESOLVED_FLAG)}] = true;"
        " });"
        " })();"
    )


# Resolves with the event's `detail` when waiting on a document event, which
# lets the page hand back its own HTML.
WAIT_FOR_RENDER = f"""
(options) => new Promise((resolve) => {{
    if (options.event) {{
        const status = window[{json.dumps(STATUS_PROPERTY)}];
        if (status && status[{json.dumps(EVENT_RESOLVED_FLAG)}]) {{
            resolve();
            return;
        }}
        document.addEventListener(options.event, (e) => resolve(e.detail));
    }} else if (options.delayMs) {{
        setTimeout(() => resolve(), options.delayMs);
    }} else {{
        resolve();
    }}
}})
""".strip()
