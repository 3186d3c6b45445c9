# run_server.py
import os

import uvicorn
from dzhehuti.main import app

if __name__ == "__main__":
    uvicorn.run(
        app,
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "3000")),
        log_level="info",
    )
