from client_logs.base import Logger

class StdoutLogger(Logger):
    """Human-readable one-liners, for running the client in a dev shell."""

    def emit(self, level, msg, data):
        record = self.record(level, msg)
        print(f"[{record['ts']}] [{self.log_type}] {level} {msg} {data}")
