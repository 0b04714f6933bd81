from typing import List, Optional


class SowGenError(Exception):
    """Base exception for all document export errors."""
    pass

class UnsupportedFormatError(SowGenError):
    pass

class ExportFailedError(SowGenError):
    pass

class ConfigurationError(SowGenError):
    def __init__(self, message: str, problems: Optional[List[str]] = None):
        super().__init__(message)
        self.problems = list(problems or [])
