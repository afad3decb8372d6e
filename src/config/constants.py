# Process environment
PACK_CONFIG_ENV = "PACK_CONFIG"
REQUEST_TIMEOUT_ENV = "PACK_REQUEST_TIMEOUT_SECONDS"

DEFAULT_REQUEST_TIMEOUT_SECONDS: float = 10.0

# HTTP methods accepted in a command's request definition
SUPPORTED_METHODS = frozenset(
    {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"}
)

# Methods whose resolved data template is sent as the request body
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

SUCCESS_EVENT_SUFFIX = "Success"
FAILURE_EVENT_SUFFIX = "Failure"
