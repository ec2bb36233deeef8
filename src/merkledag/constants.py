"""Constants used throughout merkledag."""

# Directory names
STORE_DIR = ".merkledag"
OBJECTS_DIR = "objects"

# Environment variable overriding the store location
STORE_ENV_VAR = "MERKLEDAG_STORE"

# Chunking threshold (bytes); files above this are split into blocks of this size
MAX_BLOB_SIZE = 256 * 1024  # 256 KiB

# Hash algorithm
HASH_ALGORITHM = "sha256"
DIGEST_SIZE = 32  # SHA-256 produces 32 raw bytes
HASH_LENGTH = 64  # ... and 64 hex characters

# Persisted tree envelope field names
LINKS_FIELD = "links"
DATA_FIELD = "data"

# Exit codes
EXIT_USER_ERROR = 1
EXIT_DATA_ERROR = 3
