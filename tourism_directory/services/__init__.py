from .directory import DirectoryService
from .registration import RegistrationService
from .search import SearchEngine
from .visibility import VisibilityManager

__all__ = ["DirectoryService", "RegistrationService", "SearchEngine", "VisibilityManager"]
