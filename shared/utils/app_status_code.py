class AppStatusCode:
    # success
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    CREATED_SUCCESSFULLY = "101"
    UPDATED_SUCCESSFULLY = "102"
    OPERATION_SUCCESSFUL = "103"

    # client errors
    INVALID_INPUT = "200"
    REQUIRED_VALIDATION_ERROR = "201"
    NOT_FOUND = "202"
    DUPLICATE_ADD_ERROR = "203"
    CONFLICT = "204"
    CAPACITY_EXCEEDED = "205"
    INVALID_STATE_TRANSITION = "206"

    # server errors
    OPERATION_FAILED = "300"
    BUSINESS_ERROR = "301"
