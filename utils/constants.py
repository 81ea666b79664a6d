APP_NAME = "Mini Expense Intelligence"
APP_WIDTH = 1100
APP_HEIGHT = 720
DB_FILE = "expense_intelligence.db"

DEFAULT_CURRENCY_SYMBOL = "₹"
REPORT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
REPORT_FILENAME_FORMAT = "expense_report_%Y%m%d_%H%M%S.txt"
UNKNOWN_CATEGORY = "Unknown Category"

DEFAULT_SETTINGS = [
    ("appearance_mode", "system"),
    ("currency_symbol", DEFAULT_CURRENCY_SYMBOL),
]

MODE_COLORS = {
    "C": "#FF9800",
    "D": "#7B68EE",
    "B": "#009688",
}

PRIORITY_COLORS = {
    "H": "#F44336",
    "M": "#FF9800",
    "L": "#4CAF50",
}
