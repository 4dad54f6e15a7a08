import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")

# --- Output Configuration ---
REPORT_FILENAME_BASE = os.getenv("REPORT_FILENAME", "inventory_report")
SUMMARY_FILENAME_BASE = os.getenv("SUMMARY_FILENAME", "inventory_summary")
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "true").lower() in ("1", "true", "yes")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")
LOG_FILENAME = os.getenv("LOG_FILENAME", "inventory_ledger.log")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024)))
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "3"))

# --- Demo Session ---
# Verbatim comparison only. There is no session or token model behind it.
DEMO_EMAIL = os.getenv("DEMO_EMAIL", "admin@gmail.com")
DEMO_PASSWORD = os.getenv("DEMO_PASSWORD", "Admin@1234")

# Fake latency applied to login and report generation, in seconds.
SIMULATED_DELAY_SECONDS = float(os.getenv("SIMULATED_DELAY_SECONDS", "1.0"))

# --- Mock Data ---
_seed = os.getenv("MOCK_DATA_SEED")
MOCK_DATA_SEED = int(_seed) if _seed else None
MOCK_HISTORY_DAYS = 30

# --- Report Filters (used by main.py) ---
REPORT_ITEM = os.getenv("REPORT_ITEM", "all")
REPORT_START_DATE = os.getenv("REPORT_START_DATE") or None
REPORT_END_DATE = os.getenv("REPORT_END_DATE") or None

# --- Shared Business Logic ---
ALL_ITEMS = "all"
DEFAULT_LOW_STOCK_THRESHOLD = 10
REPORT_PREVIEW_LIMIT = 10

# Organizational units a withdrawal can be attributed to.
REQUESTING_UNITS = [
    "ADMIN",
    "ICT",
    "FINANCE",
    "OPERATIONS",
    "PUBLIC RELATION",
    "CLEANERS",
    "DRIVERS",
]

# Define the catalog in one place so it's consistent everywhere.
ITEM_CATALOG = [
    {
        "id": "1",
        "name": "Office Supplies",
        "description": "General office supplies and stationery",
    },
    {
        "id": "2",
        "name": "Computer Equipment",
        "description": "Computers, laptops, monitors, etc.",
    },
    {
        "id": "3",
        "name": "Furniture",
        "description": "Office furniture and fixtures",
    },
    {
        "id": "4",
        "name": "Documents",
        "description": "Important documents and files",
    },
    {
        "id": "5",
        "name": "Safety Equipment",
        "description": "Safety gear and equipment",
    },
    {
        "id": "6",
        "name": "Cleaning Supplies",
        "description": "Cleaning materials and equipment",
    },
]
