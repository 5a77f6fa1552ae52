"""Root conftest — shared test configuration."""

import os
import tempfile

# Settings are cached on first use; defaults must be in place before app import
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault(
    "JWT_SECRET", "postboard-test-secret-with-enough-bytes-for-hs256",
)
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("IMAGES_DIR", tempfile.mkdtemp(prefix="postboard-images-"))
