from abc import ABC, abstractmethod
from datetime import datetime

LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "WARNING": 30, "ERROR": 40}

class Logger(ABC):
    """Structured event logger: an event name plus keyword fields.

    Sinks implement `emit`; events below `min_level` are dropped before
    they reach it.
    """

    def __init__(self, log_type: str = "catalog", min_level: str = "DEBUG"):
        self.log_type = log_type
        self.min_level = min_level

    @abstractmethod
    def emit(self, level: str, msg: str, data: dict): ...

    def log(self, level: str, msg: str, **data):
        if LEVELS[level] < LEVELS.get(self.min_level, 0):
            return
        self.emit(level, msg, data)

    def record(self, level: str, msg: str) -> dict:
        return {
            "ts": datetime.utcnow().isoformat(),
            "log_type": self.log_type,
            "level": level,
            "event": msg,
        }

    def info(self, msg: str, **data):
        self.log("INFO", msg, **data)

    def debug(self, msg: str, **data):
        self.log("DEBUG", msg, **data)

    def warning(self, msg: str, **data):
        self.log("WARN", msg, **data)

    def error(self, msg: str, **data):
        self.log("ERROR", msg, **data)
