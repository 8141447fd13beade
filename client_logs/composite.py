from client_logs.base import Logger

class CompositeLogger(Logger):
    """Sends every event to each wrapped logger; each applies its own level."""

    def __init__(self, *loggers: Logger):
        super().__init__(log_type="composite")
        self.loggers = loggers

    def emit(self, level, msg, data):
        for l in self.loggers:
            l.log(level, msg, **data)
