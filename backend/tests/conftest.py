import os
import sys
import tempfile
from pathlib import Path

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

# Settings are read once at import time, so pin them before anything imports app.*
_TMP = tempfile.mkdtemp(prefix="reel-places-tests-")
os.environ.setdefault("LOG_DIRECTORY", os.path.join(_TMP, "logs"))
os.environ.setdefault("LOCAL_DATA_DIR", os.path.join(_TMP, "data"))
os.environ["STORAGE_MODE"] = "local"
os.environ["KAKAO_REST_API_KEY"] = "test-kakao-key"
os.environ["NOMINATIM_USER_AGENT"] = "ReelPlacesTests/1.0"
