from enum import Enum

class PermissionStatus(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    LOADING = "LOADING"
    LOADED = "LOADED"
    ERROR = "ERROR"
