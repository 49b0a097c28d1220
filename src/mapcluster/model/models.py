from __future__ import annotations
import weakref
from dataclasses import dataclass, field
from typing import Any, Optional, List, Protocol, Tuple

LatLon = Tuple[float, float]


# --- 座標 -------------------------------------------------------------

@dataclass(frozen=True)
class Coordinate:
    """緯度経度 (度)。値型として扱う"""
    latitude: float
    longitude: float

    def as_tuple(self) -> LatLon:
        return (self.latitude, self.longitude)


# --- アノテーション ---------------------------------------------------

class ClusterAnnotation(Protocol):
    """Cluster に入れられるオブジェクトの契約

    coordinate は必須。cluster スロットは任意（あればクラスタ側が設定する）。
    """
    coordinate: Coordinate


class Annotation:
    """
    地図上の注目点。

    - 等価性は identifier で判定する（座標が変わっても同じメンバー）
    - cluster は弱参照で保持し、クラスタの寿命には関与しない
    """

    def __init__(self, identifier: str, coordinate: Coordinate, label: Optional[str] = None):
        self.identifier = identifier
        self.coordinate = coordinate
        self.label = label
        self._cluster_ref: Optional[weakref.ReferenceType] = None

    @property
    def cluster(self) -> Any:
        if self._cluster_ref is None:
            return None
        return self._cluster_ref()

    @cluster.setter
    def cluster(self, value: Any) -> None:
        self._cluster_ref = weakref.ref(value) if value is not None else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Annotation):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(self.identifier)

    def __repr__(self) -> str:
        return (f"Annotation(identifier={self.identifier!r}, "
                f"coordinate=({self.coordinate.latitude}, {self.coordinate.longitude}))")


# --- 入力グループ（外部のグルーピング結果）---------------------------

@dataclass
class AnnotationGroup:
    group_id: str
    annotations: List[Annotation] = field(default_factory=list)
    coordinate: Optional[Coordinate] = None  # 初期座標（省略時は先頭メンバー）


__all__ = [
    "Coordinate",
    "ClusterAnnotation",
    "Annotation",
    "AnnotationGroup",
    "LatLon",
]
