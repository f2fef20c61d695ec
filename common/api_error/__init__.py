from .ApiError import *
from .config_error import *
