CONTAINER_INFO = {"first_name": "John", "last_name": "Doe", "postal": "12345"}

CONTAINER_EMPTY_ERROR_MSG = "First Name is required"
LAST_NAME_EMPTY_ERROR_MSG = "Last Name is required"
POSTAL_EMPTY_ERROR_MSG = "Postal Code is required"
