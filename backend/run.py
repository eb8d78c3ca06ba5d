#!/usr/bin/env python3
# backend/run.py
"""
Development server runner.

Creates the directory tables if needed and serves the API with reload.
Set GEOCODING_PROVIDER=mock to search without provider credentials.
"""
from pathlib import Path
import os
import sys

# Add backend to path
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))
os.chdir(backend_dir)

import uvicorn

from app.database import init_db

if __name__ == "__main__":
    init_db()
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
