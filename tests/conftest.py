import os
import tempfile

# module-level loggers write to LOG_DIR on import; keep test runs out of ./logs
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="storefront-logs-"))
os.environ.setdefault("ENV", "file")
