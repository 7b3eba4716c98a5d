import os
import threading

def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ["true", "1", "yes", "on"]

class BackendSettings:
    _instance = None
    _lock = threading.Lock()

    def __init__(self):
        self.DEBUG_MODE = os.environ.get("DEBUG_MODE","development")
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL","INFO").upper()
        self.DATABASE_URL = os.environ.get("DATABASE_URL","sqlite:///famcare.db")
        # Denials are always logged; granted events only when enabled
        self.ACCESS_LOG_GRANTED = _env_flag("ACCESS_LOG_GRANTED", "false")

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(BackendSettings, cls).__new__(cls)
        return cls._instance

settings = BackendSettings()
