# utils/constants.py

# --- Properties File ---
DEFAULT_PROPERTIES_PATH = "android/key.properties"
DEFAULT_ENCODING = "utf-8"

# --- Signing Keys (fixed lookup order) ---
STORE_FILE_KEY = "storeFile"
STORE_PASSWORD_KEY = "storePassword"
KEY_ALIAS_KEY = "keyAlias"
KEY_PASSWORD_KEY = "keyPassword"

REQUIRED_SIGNING_KEYS = (
    STORE_FILE_KEY,
    STORE_PASSWORD_KEY,
    KEY_ALIAS_KEY,
    KEY_PASSWORD_KEY,
)

# --- Build Types ---
BUILD_TYPE_DEBUG = "debug"
BUILD_TYPE_RELEASE = "release"
BUILD_TYPES = [BUILD_TYPE_DEBUG, BUILD_TYPE_RELEASE]

# --- Logging ---
DEFAULT_LOG_DIR = "logs"
LOG_FILE = "signing.log"
