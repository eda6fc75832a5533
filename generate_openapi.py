"""Generate an OpenAPI schema file for the FastAPI application."""

from pathlib import Path
import json

from nutrivision.main import app


def generate_openapi(output_path: Path | None = None) -> Path:
    """Write the current OpenAPI schema to ``openapi.json``."""
    schema = app.openapi()
    output_path = output_path or Path(__file__).resolve().parent / "openapi.json"
    # Russian field descriptions and examples stay readable in the file
    output_path.write_text(json.dumps(schema, indent=2, ensure_ascii=False), encoding="utf-8")
    return output_path


if __name__ == "__main__":
    generate_openapi()
