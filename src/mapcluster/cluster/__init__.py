from .cluster import Cluster
from .strategies import (
    CoordinateStrategy,
    CentroidStrategy,
    NearestCentroidStrategy,
    BottomStrategy,
    get_strategy,
)

__all__ = [
    "Cluster",
    "CoordinateStrategy",
    "CentroidStrategy",
    "NearestCentroidStrategy",
    "BottomStrategy",
    "get_strategy",
]
