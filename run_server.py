import os

import uvicorn

if __name__ == "__main__":
    host = os.environ.get("ALERTGRAPH_HOST", "0.0.0.0")
    port = int(os.environ.get("ALERTGRAPH_PORT", "8000"))

    print("Starting Alert Graph View API...")
    print(f"Docs available at: http://localhost:{port}/docs")

    uvicorn.run(
        "alertview.api.server:app",
        host=host,
        port=port,
        reload=True
    )
