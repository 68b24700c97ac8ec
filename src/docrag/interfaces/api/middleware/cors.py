"""CORS middleware for browser clients of the retrieval API."""

import falcon.asgi

_ALLOWED_METHODS = "GET, POST, OPTIONS"
_ALLOWED_HEADERS = "Content-Type"


class CORSMiddleware:
    """Echo allowed origins and answer preflight requests.

    With no configured origins the middleware adds nothing. ``"*"``
    allows any origin.
    """

    def __init__(self, origins: list[str]) -> None:
        self._origins = origins
        self._any_origin = "*" in origins

    def _allowed_origin(self, req: falcon.asgi.Request) -> str | None:
        origin = req.get_header("Origin")
        if not origin:
            return None
        if self._any_origin or origin in self._origins:
            return origin
        return None

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Short-circuit preflight requests."""
        if req.method != "OPTIONS" or not self._origins:
            return
        resp.status = falcon.HTTP_204
        resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        """Add CORS headers when the request origin is allowed."""
        origin = self._allowed_origin(req)
        if origin is None:
            return
        resp.set_header("Access-Control-Allow-Origin", origin)
        resp.set_header("Vary", "Origin")
        if req.method == "OPTIONS":
            resp.set_header("Access-Control-Allow-Methods", _ALLOWED_METHODS)
            resp.set_header("Access-Control-Allow-Headers", _ALLOWED_HEADERS)
            resp.set_header("Access-Control-Max-Age", "86400")
