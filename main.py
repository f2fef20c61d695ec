# main.py
from dotenv import load_dotenv
from common.config import initialize_config
from common.api_error import ConfigurationError
from common.logger import get_app_logger
from app.application import create_app
from app.db import DbManager

load_dotenv()
try:
    config = initialize_config()
except ConfigurationError as e:
    # Can't use logger yet, but that's OK - this is a fatal startup error
    print(f"FATAL: Configuration error:\n{e}")
    import sys

    sys.exit(1)

logger = get_app_logger(name=__name__)
logger.info("Configuration loaded", database=config.database.to_dict_safe())

app = create_app(
    DbManager.from_config(config.database),
    title=config.app_title,
    version=config.app_version,
    environment=config.environment,
    create_schema=config.database.auto_create_schema,
)

__all__ = ["app", "config"]
