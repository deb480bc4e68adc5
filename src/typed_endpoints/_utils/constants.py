# Environment variables
ENV_BASE_URL = "TYPED_ENDPOINTS_BASE_URL"
ENV_TIMEOUT = "TYPED_ENDPOINTS_TIMEOUT"
ENV_FOLLOW_REDIRECTS = "TYPED_ENDPOINTS_FOLLOW_REDIRECTS"
ENV_VERIFY_SSL = "TYPED_ENDPOINTS_VERIFY_SSL"

DOTENV_FILE = ".env"

# Headers
HEADER_CONTENT_TYPE = "Content-Type"

# Content types
CONTENT_TYPE_JSON = "application/json"

# Request option keys owned by the endpoint itself
RESERVED_OPTION_KEYS = frozenset(
    {"url", "method", "headers", "content", "data", "files", "json"}
)

DEFAULT_TIMEOUT = 30.0

LOGGER_NAME = "typed_endpoints"
