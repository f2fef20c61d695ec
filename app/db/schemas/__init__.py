from .patient_schema import *
from .error_schema import *
