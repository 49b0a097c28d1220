# cluster/strategies.py
from __future__ import annotations
from typing import Dict, Optional, Protocol, Sequence

import numpy as np

from mapcluster.model.models import Coordinate, ClusterAnnotation
from mapcluster.projection import Projection, distances


class CoordinateStrategy(Protocol):
    """メンバー列からクラスタの表示座標を求める。空なら None"""
    name: str

    def derive(self, members: Sequence[ClusterAnnotation]) -> Optional[Coordinate]: ...


def _latlon_arrays(members: Sequence[ClusterAnnotation]):
    lats = np.array([m.coordinate.latitude for m in members], dtype=float)
    lons = np.array([m.coordinate.longitude for m in members], dtype=float)
    return lats, lons


def centroid(members: Sequence[ClusterAnnotation]) -> Optional[Coordinate]:
    """
    Arithmetic mean of latitudes and longitudes.

    Longitudes are averaged naively: a group straddling the ±180° meridian
    gets a centroid on the wrong side of the globe.
    """
    if len(members) == 0:
        return None
    lats, lons = _latlon_arrays(members)
    return Coordinate(float(lats.mean()), float(lons.mean()))


class CentroidStrategy:
    name = "centroid"

    def derive(self, members):
        return centroid(members)


class NearestCentroidStrategy:
    """centroid に最も近いメンバーの座標（同距離なら挿入順で先勝ち）"""
    name = "nearest_centroid"

    def __init__(self, projection: Optional[Projection] = None):
        self.projection = projection

    def derive(self, members):
        center = centroid(members)
        if center is None:
            return None
        d = distances(center, [m.coordinate for m in members], self.projection)
        # argmin は最初の最小値の添字を返す
        return members[int(np.argmin(d))].coordinate


class BottomStrategy:
    """最も南（緯度最小）のメンバーの座標"""
    name = "bottom"

    def derive(self, members):
        if len(members) == 0:
            return None
        lats, _ = _latlon_arrays(members)
        return members[int(np.argmin(lats))].coordinate


STRATEGIES: Dict[str, type] = {
    CentroidStrategy.name: CentroidStrategy,
    NearestCentroidStrategy.name: NearestCentroidStrategy,
    BottomStrategy.name: BottomStrategy,
}


def get_strategy(name: str) -> CoordinateStrategy:
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ValueError(
            f"Unsupported strategy: {name} (choose from {', '.join(sorted(STRATEGIES))})"
        ) from None


__all__ = [
    "CoordinateStrategy",
    "CentroidStrategy",
    "NearestCentroidStrategy",
    "BottomStrategy",
    "STRATEGIES",
    "centroid",
    "get_strategy",
]
