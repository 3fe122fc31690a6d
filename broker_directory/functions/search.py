"""Single-endpoint host for POST /api/search (wildcard CORS)."""
from ..main import create_app
from ..routers.providers import search_router

app = create_app(search_router, allow_origins=["*"], title="Broker Directory - search")
