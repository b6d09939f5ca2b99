from __future__ import annotations

from starlette.responses import RedirectResponse


class RedirectRouter:
    def __init__(self, status_code: int = 307) -> None:
        self.status_code = status_code

    def redirect(self, url: str) -> RedirectResponse:
        return RedirectResponse(url=url, status_code=self.status_code)
