# projection.py
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Protocol, Sequence, Tuple

import numpy as np

from mapcluster.model.models import Coordinate


class Projection(Protocol):
    def lonlat_to_xy(self, lon, lat) -> Tuple[float, float]: ...
    def xy_to_lonlat(self, x, y) -> Tuple[float, float]: ...


@dataclass(frozen=True)
class WebMercatorProjection:
    """EPSG:4326 <-> EPSG:3857 (scalar / numpy 配列どちらも可)"""
    def __post_init__(self):
        from pyproj import Transformer
        object.__setattr__(self, "_to_merc",
            Transformer.from_crs("EPSG:4326", "EPSG:3857", always_xy=True))
        object.__setattr__(self, "_to_geo",
            Transformer.from_crs("EPSG:3857", "EPSG:4326", always_xy=True))
    def lonlat_to_xy(self, lon, lat):
        return self._to_merc.transform(lon, lat)
    def xy_to_lonlat(self, x, y):
        return self._to_geo.transform(x, y)


@lru_cache(maxsize=1)
def default_projection() -> WebMercatorProjection:
    # Transformer の生成は重いので共有する
    return WebMercatorProjection()


def distance(from_: Coordinate, to: Coordinate, projection: Optional[Projection] = None) -> float:
    """
    Squared euclidean distance between two coordinates in the map projection.

    Only meaningful for comparing nearby points; take ``math.sqrt`` of the
    result when the actual planar distance (metres) is needed. Coordinates
    are not validated.
    """
    proj = projection or default_projection()
    ax, ay = proj.lonlat_to_xy(from_.longitude, from_.latitude)
    bx, by = proj.lonlat_to_xy(to.longitude, to.latitude)
    dx = ax - bx
    dy = ay - by
    return float(dx * dx + dy * dy)


def distances(origin: Coordinate, coordinates: Sequence[Coordinate],
              projection: Optional[Projection] = None) -> np.ndarray:
    """distance(origin, c) for every c, projected in one batch"""
    proj = projection or default_projection()
    if len(coordinates) == 0:
        return np.empty(0, dtype=float)
    ox, oy = proj.lonlat_to_xy(origin.longitude, origin.latitude)
    lons = np.array([c.longitude for c in coordinates], dtype=float)
    lats = np.array([c.latitude for c in coordinates], dtype=float)
    xs, ys = proj.lonlat_to_xy(lons, lats)
    dx = np.asarray(xs, dtype=float) - ox
    dy = np.asarray(ys, dtype=float) - oy
    return dx * dx + dy * dy
