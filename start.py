"""Hosted startup: runs the API on the port the platform assigns."""
import os
import sys
from pathlib import Path

import uvicorn

src_dir = Path(__file__).parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from api.server import app

port = int(os.environ.get("PORT", "10000"))

print(f"[start.py] Starting on port {port}", flush=True)
uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")
