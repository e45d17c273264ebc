from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

from fastapi import Request, status
from fastapi.responses import RedirectResponse
from starlette.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

_FLASH_KEY = "_flashes"

def flash(request: Request, message: str, category: str = "success") -> None:
    request.session.setdefault(_FLASH_KEY, [])
    request.session[_FLASH_KEY] = request.session[_FLASH_KEY] + [[category, message]]

def get_flashed_messages(request: Request) -> List[Tuple[str, str]]:
    return [tuple(m) for m in request.session.pop(_FLASH_KEY, [])]

templates.env.globals["get_flashed_messages"] = get_flashed_messages

def render(request: Request, name: str, context: Optional[Dict[str, Any]] = None,
           status_code: int = status.HTTP_200_OK):
    return templates.TemplateResponse(request, name, context or {}, status_code=status_code)

def redirect(url: str) -> RedirectResponse:
    # 303 so the browser follows POST/PUT/DELETE with a GET
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)

def redirect_back(request: Request, fallback: str = "/") -> RedirectResponse:
    """Redirects to the Referer when it points at this site and not at the current page."""
    referer = request.headers.get("referer")
    if referer:
        parts = urlsplit(referer)
        same_host = not parts.netloc or parts.netloc == request.url.netloc
        if same_host and referer != str(request.url):
            path = parts.path or "/"
            return redirect(f"{path}?{parts.query}" if parts.query else path)
    return redirect(fallback)
