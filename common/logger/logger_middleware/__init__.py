from .logger_middleware import *
