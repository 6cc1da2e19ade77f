"""
Core — Constants

Shared thresholds, paging limits and audit action names.

@file core/constants.py
"""

# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


# ---------------------------------------------------------------------------
# Stock alerting
# ---------------------------------------------------------------------------

# A product at or below this many units is due for reorder.
LOW_STOCK_THRESHOLD = 10

# Batches expiring within this many days raise an expiry alert.
EXPIRY_ALERT_WINDOW_DAYS = 15

# Expiry alerts at or below this many days are critical.
CRITICAL_EXPIRY_DAYS = 3

RECENT_SALES_LIMIT = 10


# ---------------------------------------------------------------------------
# Audit actions (mirror AuditLog.ActionChoices)
# ---------------------------------------------------------------------------

AUDIT_ACTION_CREATE = 'CREATE'
AUDIT_ACTION_UPDATE = 'UPDATE'
AUDIT_ACTION_DELETE = 'DELETE'
