#!/usr/bin/env python3
"""
Reel Places Backend - Run Script
Checks the environment, then starts the FastAPI server with uvicorn.
"""

import os
import sys
import subprocess
import socket
from pathlib import Path

def print_colored(message, color="blue"):
    """Print colored output"""
    colors = {
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "reset": "\033[0m"
    }
    print(f"{colors.get(color, '')}{message}{colors['reset']}")

def check_file_exists(filepath, error_message):
    """Check if a file exists"""
    if not Path(filepath).exists():
        print_colored(f"❌ Error: {error_message}", "red")
        sys.exit(1)

def check_port_open(host, port):
    """Check if a port is open"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.settimeout(2)
        return sock.connect_ex((host, port)) == 0

def read_env_value(env_path, key, default=None):
    """Environment first, then KEY=value lines of the .env file."""
    if key in os.environ:
        return os.environ[key]
    if env_path.exists():
        for line in env_path.read_text(encoding="utf-8").splitlines():
            name, sep, value = line.partition("=")
            if sep and name.strip() == key:
                return value.strip().strip('"').strip("'")
    return default

def main():
    print_colored("🚀 Starting Reel Places Backend...", "blue")

    check_file_exists("app/main.py", "app/main.py not found. Please run this script from the backend directory.")

    env_path = Path("../.env")
    if not env_path.exists():
        print_colored("⚠️  Warning: .env file not found in project root.", "yellow")
        print("Please create a .env file with at least:")
        print("  ANTHROPIC_API_KEY=your_api_key_here")
        print("  KAKAO_REST_API_KEY=your_kakao_rest_key")
        print("  STORAGE_MODE=local  # or mongodb")
        print("  LOGGER=20")
        sys.exit(1)

    if not read_env_value(env_path, "KAKAO_REST_API_KEY"):
        print_colored("⚠️  KAKAO_REST_API_KEY is not set: geocoding will only use Nominatim.", "yellow")

    # MongoDB only matters in mongodb storage mode
    if read_env_value(env_path, "STORAGE_MODE", "local") == "mongodb":
        print_colored("🔍 Checking MongoDB connection...", "blue")
        if not check_port_open("localhost", 27017):
            print_colored("⚠️  Warning: MongoDB doesn't appear to be running on localhost:27017", "yellow")
            print("  - Using Docker: docker run -d -p 27017:27017 mongo:7.0")
            print()
            response = input("Continue anyway? (y/N): ").strip().lower()
            if response != 'y':
                sys.exit(1)

    if not os.environ.get('VIRTUAL_ENV'):
        print_colored("⚠️  Virtual environment not activated.", "yellow")
        print("Please activate your virtual environment first:")
        print("  source venv/bin/activate  # On macOS/Linux")
        print("  venv\\Scripts\\activate     # On Windows")
        sys.exit(1)

    print_colored("🔍 Checking dependencies...", "blue")
    try:
        import fastapi
        import uvicorn
    except ImportError:
        print_colored("❌ Dependencies not installed.", "red")
        print("Installing dependencies...")
        subprocess.run([sys.executable, "-m", "pip", "install", "-e", ".."], check=True)

    print_colored("✅ All checks passed!", "green")
    print_colored("🌐 Starting Uvicorn server...", "blue")
    print("📍 Backend will be available at: http://localhost:8000")
    print("📍 API Health check: http://localhost:8000/health")
    print("📍 API Documentation: http://localhost:8000/docs")
    print()
    print("Press Ctrl+C to stop the server")
    print()

    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "app.main:app",
            "--reload",
            "--host", "0.0.0.0",
            "--port", "8000"
        ], check=True)
    except KeyboardInterrupt:
        print_colored("\n👋 Backend server stopped.", "yellow")
    except subprocess.CalledProcessError as e:
        print_colored(f"\n❌ Error starting server: {e}", "red")
        sys.exit(1)

if __name__ == "__main__":
    main()
