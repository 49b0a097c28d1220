"""
mapcluster: 地図表示用のアノテーションクラスタ。

- Cluster: メンバー管理と表示座標（centroid / nearest_centroid / bottom）
- distance: Web Mercator 上の二乗距離
- AnnotationLoader: グルーピング済み JSON の読み込み
"""
from mapcluster.model.models import Coordinate, Annotation, AnnotationGroup
from mapcluster.projection import distance, distances, WebMercatorProjection
from mapcluster.cluster import (
    Cluster,
    CentroidStrategy,
    NearestCentroidStrategy,
    BottomStrategy,
    get_strategy,
)

__all__ = [
    "Coordinate",
    "Annotation",
    "AnnotationGroup",
    "distance",
    "distances",
    "WebMercatorProjection",
    "Cluster",
    "CentroidStrategy",
    "NearestCentroidStrategy",
    "BottomStrategy",
    "get_strategy",
]
