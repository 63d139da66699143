import os
from dotenv import load_dotenv
from pathlib import Path

# load .env at import time from project root
# Path(__file__) is apiservice/core/config.py, so we go up 2 levels to reach project root
project_root = Path(__file__).parent.parent.parent
load_dotenv(dotenv_path=project_root / ".env")

# Transport configuration
APISERVICE_TIMEOUT = float(os.getenv("APISERVICE_TIMEOUT", "30.0"))
APISERVICE_DOWNLOAD_CHUNK_SIZE = int(os.getenv("APISERVICE_DOWNLOAD_CHUNK_SIZE", "65536"))
APISERVICE_DOWNLOAD_DIR = os.getenv("APISERVICE_DOWNLOAD_DIR")  # None -> system temp dir

# Body encoding
APISERVICE_BOUNDARY_PREFIX = os.getenv("APISERVICE_BOUNDARY_PREFIX", "Boundary-")

# Logging
APISERVICE_LOG_LEVEL = os.getenv("APISERVICE_LOG_LEVEL", "INFO")
