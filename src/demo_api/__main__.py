"""Entry point for the demo API."""
import os

import uvicorn


def main():
    """Start the demo API server on DEMO_API_HOST:DEMO_API_PORT (127.0.0.1:8000)."""
    host = os.environ.get("DEMO_API_HOST", "127.0.0.1")
    port = int(os.environ.get("DEMO_API_PORT", "8000"))
    uvicorn.run("demo_api.api:app", host=host, port=port)


if __name__ == "__main__":
    main()
