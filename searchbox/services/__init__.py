"""Service layer: index and summary clients, pipeline and state."""

from searchbox.services.debounce import DebounceController
from searchbox.services.exceptions import IndexUnavailable, ResolutionFailure, SearchError
from searchbox.services.fulfillment import SearchPipeline, classify
from searchbox.services.index_client import IndexQueryClient, QueryMode
from searchbox.services.query_state import QueryState
from searchbox.services.search_box import SearchBox
from searchbox.services.summaries import SummaryResolver

__all__ = [
    "DebounceController",
    "IndexQueryClient",
    "IndexUnavailable",
    "QueryMode",
    "QueryState",
    "ResolutionFailure",
    "SearchBox",
    "SearchError",
    "SearchPipeline",
    "SummaryResolver",
    "classify",
]
