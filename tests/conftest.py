import os
import tempfile

# Settings are cached on first import; point them at SQLite before any
# massage_booking module is loaded.
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite:///{os.path.join(tempfile.gettempdir(), 'massage_booking_app.db')}",
)
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("BUSINESS_TIMEZONE", "America/Chicago")
