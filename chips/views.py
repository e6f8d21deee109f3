from pathlib import Path
from fastapi import Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from .security import clear_flash, flash, read_flash

templates = Jinja2Templates(directory=str(Path(__file__).with_name("templates")))

def render(request: Request, name: str, context: dict = None):
    """Render a page, consuming any pending flash message."""
    message = read_flash(request)
    ctx = dict(context or {})
    ctx["messages"] = [message] if message else []
    resp = templates.TemplateResponse(request, name, ctx)
    if message:
        clear_flash(resp)
    return resp

def redirect(url: str, category: str = None, message: str = None) -> RedirectResponse:
    resp = RedirectResponse(url=url, status_code=303)
    if message:
        flash(resp, category or "info", message)
    return resp
