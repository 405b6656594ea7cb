"""
SpendSight — Configuration: paths, engine constants, column aliases.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths — override with env vars for deployment
# ---------------------------------------------------------------------------
_data_file = os.environ.get("SPENDSIGHT_DATA_FILE")
DATA_FILE = Path(_data_file) if _data_file else None
DATA_POLARITY = os.environ.get("SPENDSIGHT_POLARITY", "explicit")
REPORTS_FOLDER = Path(os.environ.get("SPENDSIGHT_REPORTS_DIR", str(Path.home() / "SpendSight" / "reports")))

LOG_LEVEL = os.environ.get("SPENDSIGHT_LOG_LEVEL")

# ---------------------------------------------------------------------------
# Windowing
# ---------------------------------------------------------------------------
MIN_ZOOM = 1.0
MAX_ZOOM = 5.0
DEFAULT_ZOOM_CENTER = 0.5
WHEEL_SENSITIVITY = 0.001     # zoom change per unit of wheel deltaY
ZOOM_ANCHOR_DAMPING = 0.2     # fraction of the distance to the cursor

# ---------------------------------------------------------------------------
# Change detection sampling
# ---------------------------------------------------------------------------
CHANGE_SAMPLE_THRESHOLD = 10
CHANGE_SAMPLE_QUANTILES = (0.25, 0.5, 0.75)

# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------
UNKNOWN = "UNKNOWN"
NO_CHANGE_PERCENT = 100

# Raw record keys → internal names. Keys already in internal form pass through.
COLUMN_MAP = {
    "transaction_id": "id",
    "transactionId": "id",
    "isCredit": "is_credit",
    "merchant": "merchant_name",
    "merchantName": "merchant_name",
    "description": "name",
    "accountId": "account_id",
    "overallTotal": "overall_total",
    "minimizedTotal": "minimized_total",
    "totalValue": "total_value",
}

# Wire names for the derived/renamed fields (Transaction.to_dict)
WIRE_NAMES = {
    "is_credit": "isCredit",
    "overall_total": "overallTotal",
    "minimized_total": "minimizedTotal",
    "total_value": "totalValue",
}

CREDIT_TYPE_VALUES = {"CREDIT"}

# ---------------------------------------------------------------------------
# HTTP error messages
# ---------------------------------------------------------------------------
MISSING_BODY_ERROR = "Missing request body"
MISSING_CHART_DATA_ERROR = "Missing chartData"
PROJECTION_FAILED_ERROR = "Failed to generate budget projection"
