"""
Dashboard Constants Module.

Centralizes column definitions, styling constants, timing values and
user-facing messages used across dashboard components.
"""

import os

# =============================================================================
# API
# =============================================================================

API_BASE_URL = os.environ.get("TASKBOARD_API_URL", "http://localhost:3000/api")
API_TIMEOUT_SECONDS = 10

# =============================================================================
# BOARD COLUMNS
# =============================================================================

COLUMNS = [
    {"id": "pending", "title": "Pending", "color": "warning"},
    {"id": "in-progress", "title": "In Progress", "color": "primary"},
    {"id": "completed", "title": "Completed", "color": "success"},
]

COLUMN_IDS = [column["id"] for column in COLUMNS]

STATUS_OPTIONS = [{"label": column["title"], "value": column["id"]} for column in COLUMNS]

DEFAULT_STATUS = "pending"

# =============================================================================
# TIMING
# =============================================================================

# Seconds a transient board error stays visible after a failed optimistic action
ERROR_CLEAR_DELAY = 3.0

# Seconds the profile success message stays visible
SUCCESS_CLEAR_DELAY = 3.0

# Tick used to expire transient messages
TICK_INTERVAL_MS = 1000

# =============================================================================
# LAYOUT
# =============================================================================

LAYOUT = {
    "COLUMN_WIDTH_MD": 4,
    "ROW_GAP": 4,
    "COLUMN_MIN_HEIGHT": "480px",
    "DESCRIPTION_TEXTAREA_ROWS": 4,
}

# =============================================================================
# MESSAGES
# =============================================================================

MESSAGES = {
    "connection": (
        "Cannot connect to backend server. "
        "Please ensure the backend is running on port 3000."
    ),
    "auth": "Authentication failed. Please log in again.",
    "validation": "Invalid data. Please check your input.",
    "server": "Server error. Please try again later.",
    "fetch_failed": "Failed to load tasks. Please try again.",
    "create_failed": "Failed to create task. Please check your connection and try again.",
    "move_failed": "Failed to update task status. Changes have been reverted.",
    "delete_failed": "Failed to delete task. The board has been refreshed.",
    "profile_failed": "Failed to load profile. Please try again.",
    "profile_update_failed": (
        "Failed to update profile. Please check your connection and try again."
    ),
    "account_delete_failed": (
        "Failed to delete account. Please try again or contact support."
    ),
    "title_required": "Title is required",
}

NO_DUE_DATE = "No due date"
