import os

# Project root (parent of the package directory)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Dataset source: local path or http(s) URL
DATASET_PATH = os.getenv(
    "DATASET_PATH",
    os.path.join(BASE_DIR, "DSE-Engineering-College-List.json")
)
DATASET_COLLECTION = os.getenv("DATASET_COLLECTION", "MHT-CET College Data")
DATASET_TIMEOUT = 30

RESULTS_PER_PAGE = 20
PAGE_WINDOW = 2

PORT = int(os.getenv("PORT", 8000))
