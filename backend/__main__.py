"""
Entry point for running the application with `python -m backend`.
"""
import logging

import uvicorn

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    uvicorn.run("backend.main:app", host="0.0.0.0", port=8001, reload=True)
