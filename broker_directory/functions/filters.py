"""Single-endpoint host for GET /api/filters (wildcard CORS)."""
from ..main import create_app
from ..routers.providers import filters_router

app = create_app(filters_router, allow_origins=["*"], title="Broker Directory - filters")
