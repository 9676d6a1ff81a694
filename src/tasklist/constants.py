CONFIG_FILE = "tasklist.yaml"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3001
DEFAULT_TIMEOUT = 10.0  # seconds, client side
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CLIENT_LOG_LEVEL = "WARNING"

DEFAULT_LOCALE = "ja"
SUPPORTED_LOCALES = ("ja", "en")
