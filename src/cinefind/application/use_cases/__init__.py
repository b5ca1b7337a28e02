from .catalog_fetch import FetchOrchestrator
from .detail_loader import DetailLoader
from .trending_reporter import TrendingReporter

__all__ = ["DetailLoader", "FetchOrchestrator", "TrendingReporter"]
