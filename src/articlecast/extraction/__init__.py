"""正文提取模块."""

from articlecast.extraction.base import ArticleExtractor, ExtractedArticle
from articlecast.extraction.coordinator import ExtractionCoordinator
from articlecast.extraction.gate import QualityGate
from articlecast.extraction.heuristic import HeuristicExtractor
from articlecast.extraction.model import ModelExtractor

__all__ = [
    "ArticleExtractor",
    "ExtractedArticle",
    "ExtractionCoordinator",
    "HeuristicExtractor",
    "ModelExtractor",
    "QualityGate",
]
