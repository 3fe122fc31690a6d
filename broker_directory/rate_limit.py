"""
Per-client fixed-window rate limiting (slowapi on top of ``limits``).

Filters and search share one counter per client: 30 requests per 60 s
window by default, the window opening on the client's first request.
``memory://`` storage keeps counters per process and evicts expired
windows; point ``RATE_LIMIT_STORAGE_URI`` at Redis when running more than
one instance so they share counts.
"""
from slowapi import Limiter
from starlette.requests import Request

from .config import RATE_LIMIT, RATE_LIMIT_ENABLED, RATE_LIMIT_STORAGE_URI

UNKNOWN_CLIENT = "unknown"
SHARED_SCOPE = "api"


def client_key(request: Request) -> str:
    # unidentifiable clients all land in the same bucket
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


limiter = Limiter(
    key_func=client_key,
    strategy="fixed-window",
    storage_uri=RATE_LIMIT_STORAGE_URI,
    enabled=RATE_LIMIT_ENABLED,
)

# Applied to every throttled endpoint; health and OPTIONS stay unthrottled.
api_limit = limiter.shared_limit(RATE_LIMIT, scope=SHARED_SCOPE)
