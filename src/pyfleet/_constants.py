"""Internal constants shared across the library."""

DEFAULT_PAGE_SIZE = 5
MAX_COMMENT_LENGTH = 500
MIN_YEAR = 1900
STORAGE_KEY = "vehicles"

# ------------------------------------------------------------------
# User-facing feedback messages
# ------------------------------------------------------------------

MSG_PERMISSION_DENIED = "You do not have permission for this action"
MSG_CREATED = "Vehicle registered successfully!"
MSG_UPDATED = "Vehicle updated successfully!"
MSG_DELETED = "Vehicle deleted successfully!"
MSG_COMMENTED = "Comment added."
MSG_CONFIRM_DELETE = "Are you sure you want to delete this vehicle?"
