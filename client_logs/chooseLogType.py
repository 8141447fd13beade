from client_logs.stdout import StdoutLogger
from client_logs.file import FileLogger
from client_logs.json import JSONLogger
from client_logs.composite import CompositeLogger

def get_logger(mode="dev", log_type="catalog", base_path="logs", min_level="DEBUG"):
    """Pick the sinks for a run mode: dev (stdout), prod (file + JSON) or file."""
    if mode == "prod":
        return CompositeLogger(
            FileLogger(log_type=log_type, base_path=base_path, min_level=min_level),
            JSONLogger(log_type=log_type, min_level=min_level)
        )
    # the interactive client keeps stdout for the pages themselves
    if mode == "file":
        return FileLogger(log_type=log_type, base_path=base_path, min_level=min_level)
    return StdoutLogger(log_type=log_type, min_level=min_level)
