from .catalog import CatalogClientPort
from .trending import TrendingStorePort

__all__ = [
    "CatalogClientPort",
    "TrendingStorePort",
]
