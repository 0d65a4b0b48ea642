class AppStatusCode:
    # Success
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    CREATED_SUCCESSFULLY = "101"
    UPDATED_SUCCESSFULLY = "102"

    # Authentication
    AUTHENTICATION_TOKEN_INVALID = "200"
    AUTHENTICATION_TOKEN_EXPIRED = "201"
    UNAUTHORIZED_ACTION = "202"

    # Validation
    INVALID_INPUT = "300"
    REQUIRED_VALIDATION_ERROR = "301"
    INVALID_DATE = "302"

    # Housekeeping
    HOTEL_NOT_FOUND = "400"
    ROOM_NOT_FOUND = "401"
    TASK_NOT_FOUND = "402"
    INVALID_STATUS_TRANSITION = "403"
    STALE_TASK_STATE = "404"
    DUPLICATE_ADD_ERROR = "405"

    # Generic
    OPERATION_FAILED = "500"
