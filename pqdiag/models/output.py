# pqdiag/models/output.py
from enum import Enum

class Style(Enum):
    HEADER = "header"
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    PLAIN = "plain"
