from .diskcache_store import DiskcacheTrendingStore
from .factory import create_trending_store
from .redis_store import RedisTrendingStore

__all__ = ["DiskcacheTrendingStore", "RedisTrendingStore", "create_trending_store"]
