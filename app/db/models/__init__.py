from .db_base_model import *
from .patient_table import *
