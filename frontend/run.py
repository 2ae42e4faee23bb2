#!/usr/bin/env python3
"""
Reel Places Frontend - Run Script
Starts the Streamlit UI against a running backend.

    python frontend/run.py [--port 8501] [--backend-url http://localhost:8000]
"""

import argparse
import importlib.util
import os
import sys
import subprocess
from pathlib import Path

import requests

APP_PATH = Path(__file__).resolve().parent / "app.py"

def backend_is_up(backend_url):
    try:
        return requests.get(f"{backend_url}/health", timeout=2).status_code == 200
    except requests.exceptions.RequestException:
        return False

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the Reel Places Streamlit UI")
    parser.add_argument("--port", default=os.environ.get("FRONTEND_PORT", "8501"))
    parser.add_argument("--backend-url", default=os.environ.get("BACKEND_URL", "http://localhost:8000"))
    return parser.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    backend_url = args.backend_url.rstrip("/")

    if importlib.util.find_spec("streamlit") is None:
        sys.exit("streamlit is not installed. Run: pip install -e '.[frontend]'")

    # app.py shows its own disconnected notice; warn only
    if not backend_is_up(backend_url):
        print(f"⚠️  No backend answering at {backend_url}/health (start it with: cd backend && python run.py)")

    print(f"🌐 Reel Places UI on http://localhost:{args.port} -> backend {backend_url}")

    try:
        subprocess.run(
            [sys.executable, "-m", "streamlit", "run", str(APP_PATH), "--server.port", str(args.port)],
            check=True,
            env={**os.environ, "BACKEND_URL": backend_url},
        )
    except KeyboardInterrupt:
        print("\n👋 Frontend server stopped.")
    except subprocess.CalledProcessError as e:
        sys.exit(f"Streamlit exited with status {e.returncode}")

if __name__ == "__main__":
    main()
