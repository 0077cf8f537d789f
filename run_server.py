#!/usr/bin/env python3
"""Run the FastAPI server."""

import os

import uvicorn

if __name__ == "__main__":
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))

    print(f"Starting server on http://{host}:{port}")
    print(f"  - http://{host}:{port}/health")

    uvicorn.run(
        "viz_datasource.main:app",
        host=host,
        port=port,
        reload=os.getenv("RELOAD", "false").lower() == "true"
    )
