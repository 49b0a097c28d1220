# cluster/cluster.py
from __future__ import annotations
import operator
from typing import Iterator, List, Optional, Union

from mapcluster.model.models import Coordinate, ClusterAnnotation
from .strategies import CoordinateStrategy, get_strategy


class Cluster:
    """
    1つのマーカーとして表示されるアノテーションの集まり。

    - メンバーは挿入順を保持し、重複（== で判定）は持たない
    - coordinate は独立した値。update_coordinate() を呼んだ時だけ strategy で再計算する
    - メンバーが cluster スロットを持つ場合は追加/削除時に back-reference を更新する

    Not thread-safe: a clustering pass must own its clusters exclusively.
    """

    def __init__(self, coordinate: Coordinate, strategy: Optional[CoordinateStrategy] = None):
        self.coordinate = coordinate
        self.strategy = strategy
        self._annotations: List[ClusterAnnotation] = []

    @classmethod
    def with_coordinate(
        cls,
        coordinate: Coordinate,
        strategy: Union[CoordinateStrategy, str, None] = None,
    ) -> "Cluster":
        """Instantiate an empty cluster at ``coordinate``.

        ``strategy`` may be a strategy object or a registered name
        (``"centroid"``, ``"nearest_centroid"``, ``"bottom"``).
        """
        if isinstance(strategy, str):
            strategy = get_strategy(strategy)
        return cls(coordinate, strategy)

    # --- 参照 ---------------------------------------------------------

    @property
    def count(self) -> int:
        return len(self._annotations)

    @property
    def first_annotation(self) -> Optional[ClusterAnnotation]:
        return self._annotations[0] if self._annotations else None

    @property
    def last_annotation(self) -> Optional[ClusterAnnotation]:
        return self._annotations[-1] if self._annotations else None

    @property
    def annotations(self) -> List[ClusterAnnotation]:
        """現在のメンバーのスナップショット（挿入順）"""
        return list(self._annotations)

    def annotation_at_index(self, index: int) -> ClusterAnnotation:
        """Return the member at ``index``.

        Raises IndexError when ``index`` is negative or not below ``count``;
        negative indexes do not wrap around.
        """
        index = operator.index(index)
        if index < 0 or index >= len(self._annotations):
            raise IndexError(
                f"annotation index {index} beyond bounds [0 .. {len(self._annotations)})"
            )
        return self._annotations[index]

    def contains_annotation(self, annotation: ClusterAnnotation) -> bool:
        return any(a == annotation for a in self._annotations)

    # --- 更新 ---------------------------------------------------------

    def add_annotation(self, annotation: ClusterAnnotation) -> None:
        if self.contains_annotation(annotation):
            return
        self._annotations.append(annotation)
        if hasattr(annotation, "cluster"):
            annotation.cluster = self

    def remove_annotation(self, annotation: ClusterAnnotation) -> None:
        for i, a in enumerate(self._annotations):
            if a == annotation:
                removed = self._annotations.pop(i)
                if getattr(removed, "cluster", None) is self:
                    removed.cluster = None
                return

    def copy_cluster_values(self, cluster: "Cluster") -> None:
        """coordinate とメンバー列をコピーする（メンバー列は別リスト）"""
        self.coordinate = cluster.coordinate
        self._annotations = list(cluster._annotations)

    def update_coordinate(self) -> Coordinate:
        """Recompute ``coordinate`` from the members with the cluster's strategy.

        Leaves the coordinate untouched when the cluster is empty or has no
        strategy. Returns the (possibly unchanged) coordinate.
        """
        if self.strategy is not None:
            derived = self.strategy.derive(self._annotations)
            if derived is not None:
                self.coordinate = derived
        return self.coordinate

    # --- Python プロトコル ---------------------------------------------

    def __len__(self) -> int:
        return len(self._annotations)

    def __iter__(self) -> Iterator[ClusterAnnotation]:
        return iter(list(self._annotations))

    def __contains__(self, annotation: object) -> bool:
        return self.contains_annotation(annotation)

    def __getitem__(self, index: int) -> ClusterAnnotation:
        return self.annotation_at_index(index)

    def __repr__(self) -> str:
        name = self.strategy.name if self.strategy is not None else None
        return (f"Cluster(coordinate=({self.coordinate.latitude}, {self.coordinate.longitude}), "
                f"count={self.count}, strategy={name!r})")


__all__ = ["Cluster"]
