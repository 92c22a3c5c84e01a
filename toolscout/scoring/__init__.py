"""Ranking engine: recommendation and search scoring."""

from .config import ScoringConfig
from .glob import match_glob
from .recommender import recommend, score_entry
from .search import search
from .similarity import SimilarityMatrix, build_similarity_matrix

__all__ = [
    "ScoringConfig",
    "SimilarityMatrix",
    "build_similarity_matrix",
    "match_glob",
    "recommend",
    "score_entry",
    "search",
]
