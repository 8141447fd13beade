from client_logs.base import Logger
from pathlib import Path
import json

class FileLogger(Logger):
    """Appends one JSON object per event to ``<base_path>/<log_type>.log``."""

    def __init__(self, log_type="catalog", base_path="logs", min_level="DEBUG"):
        super().__init__(log_type=log_type, min_level=min_level)
        self.path = Path(base_path) / f"{log_type}.log"
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, level, msg, data):
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(json.dumps({**self.record(level, msg), **data}, default=str) + "\n")
