from .app.main import compare, explain, get_analysis, get_comparison, get_explanation, ingest

__all__ = [
    "ingest",
    "compare",
    "get_analysis",
    "get_comparison",
    "explain",
    "get_explanation",
]

# stdlib logging defaults: attach NullHandler to prevent 'No handler' warnings
import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
