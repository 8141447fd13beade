from client_logs.chooseLogType import get_logger
import os

env = os.getenv("ENV", "file")
log_dir = os.getenv("LOG_DIR", "logs")
log_level = os.getenv("LOG_LEVEL", "INFO").upper()

catalog_logger = get_logger(mode=env, log_type="catalog", base_path=log_dir, min_level=log_level)
card_logger = get_logger(mode=env, log_type="card", base_path=log_dir, min_level=log_level)
fetch_logger = get_logger(mode=env, log_type="fetch", base_path=log_dir, min_level=log_level)
