from .api_error import *
from .config import *
from .logger import logger, get_app_logger
