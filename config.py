import os

from dotenv import load_dotenv

from enums.language import Language
from enums.runtime_environment import RuntimeEnvironment

# Load .env but don't override existing environment variables
# This allows test scripts to set RUNTIME_ENVIRONMENT=TEST before import
load_dotenv(".env", override=False)

# Parse RUNTIME_ENVIRONMENT with clear error message on misconfiguration
try:
    _runtime_env_str = os.environ.get("RUNTIME_ENVIRONMENT")
    if not _runtime_env_str:
        raise ValueError("RUNTIME_ENVIRONMENT environment variable is not set")
    RUNTIME_ENVIRONMENT = RuntimeEnvironment(_runtime_env_str)
except ValueError as e:
    valid_values = [env.value for env in RuntimeEnvironment]
    import sys
    print(f"\n ERROR: Invalid RUNTIME_ENVIRONMENT configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Valid values: {', '.join(valid_values)}", file=sys.stderr)
    print(f"Current value: {os.environ.get('RUNTIME_ENVIRONMENT', '(not set)')}", file=sys.stderr)
    print(f"\nAdd to .env: RUNTIME_ENVIRONMENT={valid_values[0]}\n", file=sys.stderr)
    sys.exit(1)

# Web server
WEB_HOST = os.environ.get("WEB_HOST", "0.0.0.0")
WEB_PORT = int(os.environ.get("WEB_PORT", "8000"))

# Store database (documents are stored as rows with JSON columns)
DB_URL = os.environ.get("DB_URL", "sqlite+aiosqlite:///data/store.db")

# Client state (cart, favorites, language) lives in Redis, one namespace per client id
REDIS_HOST = os.environ.get("REDIS_HOST", "localhost")
REDIS_PORT = int(os.environ.get("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.environ.get("REDIS_PASSWORD")
CLIENT_STATE_TTL_DAYS = int(os.environ.get("CLIENT_STATE_TTL_DAYS", "90"))
# Requests of one client that change the same key run one at a time
CLIENT_STATE_LOCK_TIMEOUT_SECONDS = float(os.environ.get("CLIENT_STATE_LOCK_TIMEOUT_SECONDS", "10"))
CLIENT_STATE_LOCK_WAIT_SECONDS = float(os.environ.get("CLIENT_STATE_LOCK_WAIT_SECONDS", "5"))

# Object storage for uploaded images
MEDIA_ROOT = os.environ.get("MEDIA_ROOT", "./media")
MEDIA_URL = os.environ.get("MEDIA_URL", "/media/")

# Parse DEFAULT_LANGUAGE with error handling
try:
    DEFAULT_LANGUAGE = Language(os.environ.get("DEFAULT_LANGUAGE", Language.AR.value))
except ValueError as e:
    valid_languages = [lang.value for lang in Language]
    import sys
    print(f"\n ERROR: Invalid DEFAULT_LANGUAGE configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Valid values: {', '.join(valid_languages)}", file=sys.stderr)
    print(f"Current value: {os.environ.get('DEFAULT_LANGUAGE', '(not set)')}\n", file=sys.stderr)
    sys.exit(1)

# Checkout
# The storefront charges no shipping at checkout; settings.shipping is informational
# unless CHECKOUT_APPLY_SHIPPING_SETTINGS is enabled.
CHECKOUT_APPLY_SHIPPING_SETTINGS = os.environ.get("CHECKOUT_APPLY_SHIPPING_SETTINGS", "false") == "true"

# Transactional mail (order status notifications)
SENDGRID_API_URL = os.environ.get("SENDGRID_API_URL", "https://api.sendgrid.com/v3/mail/send")
SENDGRID_API_KEY = os.environ.get("SENDGRID_API_KEY", "")
SENDGRID_STATUS_TEMPLATE_ID = os.environ.get("SENDGRID_STATUS_TEMPLATE_ID", "")
MAIL_FROM = os.environ.get("MAIL_FROM", "noreply@lisaperfume.com")

# Authentication
AUTH_SESSION_DAYS = int(os.environ.get("AUTH_SESSION_DAYS", "3"))
PASSWORD_HASH_ITERATIONS = int(os.environ.get("PASSWORD_HASH_ITERATIONS", "100000"))

# Logging Configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask sensitive data in logs

# Log Retention: Environment-specific defaults
# Dev: keep a month of logs for debugging
# Prod: Use 5 days default to save disk space
if RUNTIME_ENVIRONMENT == RuntimeEnvironment.DEV:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "30"))
else:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "5"))

# HTTP security configuration
SECURITY_HEADERS_ENABLED = os.environ.get("SECURITY_HEADERS_ENABLED", "true") == "true"
HSTS_ENABLED = os.environ.get("HSTS_ENABLED", "false") == "true"  # Enable HSTS (only for HTTPS)
CORS_ALLOWED_ORIGINS = os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",") if os.environ.get("CORS_ALLOWED_ORIGINS") else []
