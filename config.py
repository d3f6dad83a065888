# config.py
import os
from dotenv import load_dotenv

load_dotenv()


class ConfigError(RuntimeError):
    pass


class Settings:
    def __init__(self, mongo_uri: str, db_name: str, host: str = "0.0.0.0", port: int = 5000):
        self.mongo_uri = mongo_uri
        self.db_name = db_name
        self.host = host
        self.port = port


def get_settings() -> Settings:
    """Read settings from the environment, refusing to continue without a store."""
    mongo_uri = os.getenv("MONGO_URI")
    db_name = os.getenv("DB_NAME")
    if not mongo_uri or not db_name:
        raise ConfigError("Missing MONGO_URI or DB_NAME env vars.")
    return Settings(
        mongo_uri=mongo_uri,
        db_name=db_name,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
    )
