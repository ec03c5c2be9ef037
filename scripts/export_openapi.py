"""Write the service's OpenAPI document to docs/openapi.json.

Run from the project root; the output directory is created if needed.
"""

import json
from pathlib import Path

from fastapi.openapi.utils import get_openapi

from recipe_extractor.core.config import Settings
from recipe_extractor.factory import create_app


# Metrics off so the instrumentator does not register collectors twice
app = create_app(Settings(observability={"metrics": {"enabled": False}}))

openapi_schema = get_openapi(
    title=app.title,
    version=app.version,
    description=app.description,
    routes=app.routes,
)

output = Path("docs/openapi.json")
output.parent.mkdir(parents=True, exist_ok=True)
with output.open("w", encoding="utf-8") as f:
    json.dump(openapi_schema, f, indent=2)
