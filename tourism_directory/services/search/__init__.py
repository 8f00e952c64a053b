from .engine import SearchEngine
from .filters import apply_filters
from .scoring import relevance_score
from .sorting import sort_results

__all__ = ["SearchEngine", "apply_filters", "relevance_score", "sort_results"]
