"""Test-wide environment defaults.

api.security refuses to import without JWT_SECRET_KEY. MONGO_URL is blanked
so no test reaches a real database, even with a local .env present.
"""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client-id.apps.googleusercontent.com")
os.environ["MONGO_URL"] = ""
