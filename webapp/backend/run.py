import os

import uvicorn

if __name__ == "__main__":
    from main import app
    uvicorn.run(
        app,
        host=os.environ.get("DAYPLAN_HOST", "127.0.0.1"),
        port=int(os.environ.get("DAYPLAN_PORT", "8000")),
        workers=1,
    )
