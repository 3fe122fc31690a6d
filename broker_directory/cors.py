from fastapi.routing import APIRoute
from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response
from starlette.types import Receive, Scope, Send


def route_methods(routers) -> dict[str, str]:
    """Map each API path to the Access-Control-Allow-Methods value it advertises.

    Read from the routers themselves: their routes already carry the prefix.
    """
    methods: dict[str, set] = {}
    for router in routers:
        for route in router.routes:
            if isinstance(route, APIRoute):
                methods.setdefault(route.path, set()).update(route.methods)
    return {path: ", ".join(sorted(m)) + ", OPTIONS" for path, m in methods.items()}


class DirectoryCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that answers every OPTIONS request on its own.

    Pre-flights (and bare OPTIONS requests) get 200 with an empty body before
    routing, so they are never rate limited and never 405.
    """

    def __init__(self, app, allow_methods_by_path: dict[str, str] | None = None, **kwargs):
        super().__init__(app, **kwargs)
        self.allow_methods_by_path = allow_methods_by_path or {}

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "OPTIONS":
            response = Response(status_code=200, headers=self.options_headers(scope))
            await response(scope, receive, send)
            return
        await super().__call__(scope, receive, send)

    def options_headers(self, scope: Scope) -> dict[str, str]:
        headers = dict(self.preflight_headers)
        origin = Headers(scope=scope).get("origin")
        if origin and not self.allow_all_origins and self.is_allowed_origin(origin=origin):
            headers["Access-Control-Allow-Origin"] = origin
        path_methods = self.allow_methods_by_path.get(scope["path"])
        if path_methods:
            headers["Access-Control-Allow-Methods"] = path_methods
        return headers
