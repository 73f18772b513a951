"""Server-side HTML rendering with Jinja2.

``render`` reads the layout, flash messages and session from the current
request context, so handlers only pass their own data. Page templates extend
the ``layout`` variable:

```jinja
{% extends layout %}
{% block content %}...{% endblock %}
```
"""

from pathlib import Path
from typing import Any

from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from conduit.router import get_request_context

TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_LAYOUT = "layouts/default.html"

templates = Jinja2Templates(directory=TEMPLATE_DIR)


def render(template_name: str, context: dict[str, Any] | None = None, status: int = 200, headers: dict[str, str] | None = None) -> HTMLResponse:
    """Render a page template inside the layout selected for this request."""
    ctx = get_request_context()
    data = {
        "layout": ctx.layout or DEFAULT_LAYOUT,
        "flash": ctx.flash,
        "session": ctx.session,
        "params": ctx.params,
        "query": ctx.query,
        **(context or {}),
    }
    return templates.TemplateResponse(ctx.request, template_name, data, status_code=status, headers=headers)
