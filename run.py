#!/usr/bin/env python3
"""Run the datepoll API with uvicorn.

DATEPOLL_HOST / DATEPOLL_PORT / DATEPOLL_RELOAD may be set in the environment or .env.
"""

import os

import uvicorn
from dotenv import load_dotenv

load_dotenv()

if __name__ == "__main__":
    uvicorn.run(
        "datepoll.api.app:app",
        host=os.getenv("DATEPOLL_HOST", "127.0.0.1"),
        port=int(os.getenv("DATEPOLL_PORT", "8000")),
        reload=os.getenv("DATEPOLL_RELOAD", "false").lower() == "true",
    )
