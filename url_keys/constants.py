"""Application-wide constants.

Contains configuration constants used across the codebase to avoid magic numbers
and maintain consistency.
"""

# URL Key Generation
DEFAULT_URL_SUFFIX = ".html"  # Suffix appended to request paths when none is configured
DEFAULT_MAX_ATTEMPTS = 100  # Maximum number of uniqueness mutations per generate() call
UNIQUE_TOKEN_LENGTH = 4  # Length of the token appended on collision
UNIQUE_TOKEN_SEPARATOR = "-"  # Joins the candidate value and the uniqueness token

# Config Lookup
SCOPE_TYPE_STORE = "store"

# Path Index Fields
FIELD_STORE_ID = "store_id"
FIELD_ENTITY_ID = "entity_id"
FIELD_ENTITY_TYPE = "entity_type"
FIELD_REQUEST_PATH = "request_path"

# Entity Fields
DEFAULT_URL_KEY_ATTRIBUTE = "url_key"
EXTENSIBLE_STORE_ID_FIELD = "store"  # Scope field carried by extensible entities

# Logging
DEFAULT_LOG_FILE = "logs/url_keys.log"

# CLI
CONFIG_ENV_VAR = "URL_KEYS_CONFIG"
DEFAULT_CONFIG_FILE = "config/url_keys.yaml"
DEFAULT_INDEX_FILE = "data/url_rewrites.json"
