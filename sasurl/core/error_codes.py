class ErrorCode:
    UNAUTHORIZED = "UNAUTHORIZED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    BLOB_NOT_FOUND = "BLOB_NOT_FOUND"
