from client_logs.base import Logger
import json

class JSONLogger(Logger):
    """One JSON object per event on stdout, fields nested under "data"."""

    def emit(self, level, msg, data):
        # default=str keeps unserializable values (exceptions, models) printable
        print(json.dumps({**self.record(level, msg), "data": data}, default=str))
