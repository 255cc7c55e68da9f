"""
Reply builder handed to the error pipeline.

Collects status, headers and an optional redirect while the pipeline
runs, then turns the pipeline result into a Starlette response.
"""

from typing import Any, Optional

from starlette.responses import JSONResponse, RedirectResponse, Response


class Reply:
    """Mutable response state for one failed request."""

    def __init__(self) -> None:
        self.status_code = 200
        self.headers: dict[str, str] = {}
        self.redirect_url: Optional[str] = None

    def status(self, code: int) -> "Reply":
        self.status_code = code
        return self

    def header(self, name: str, value: Any) -> "Reply":
        self.headers[name] = str(value)
        return self

    def redirect(self, code: int, url: str) -> "Reply":
        self.status_code = code
        self.redirect_url = url
        return self

    def to_response(self, result: Any) -> Response:
        """Build the response for a pipeline result.

        Responses returned by hooks are sent as they are. Text and bytes
        become the body, other values are sent as JSON.

        Raises:
            ValueError: If there is neither a result nor a redirect.
        """
        if isinstance(result, Response):
            return result
        if result is None:
            if self.redirect_url is None:
                raise ValueError("Error pipeline produced no response")
            return RedirectResponse(
                self.redirect_url, status_code=self.status_code, headers=self.headers
            )
        if isinstance(result, (str, bytes)):
            return Response(
                result,
                status_code=self.status_code,
                headers=self.headers,
                media_type="text/html",
            )
        return JSONResponse(result, status_code=self.status_code, headers=self.headers)
