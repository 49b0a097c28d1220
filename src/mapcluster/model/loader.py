from __future__ import annotations
import pathlib, json, warnings
from typing import Any, List, Iterable, Optional, Set, Union

from jsonschema import validate

from .models import Annotation, AnnotationGroup, Coordinate
from mapcluster.cluster import Cluster, CoordinateStrategy, get_strategy


class AnnotationLoader:
    """グルーピング済みアノテーション JSON を読み込んで Cluster を組み立てるローダ"""

    def __init__(self, validate_schema: bool = True, schema_dir: str | pathlib.Path | None = None):
        self.validate_schema = validate_schema
        # デフォルト: このパッケージの schemas ディレクトリ
        if schema_dir is None:
            self.schema_dir = pathlib.Path(__file__).parent.parent / "schemas"
        else:
            self.schema_dir = pathlib.Path(schema_dir)

    def _load_json(self, path: str | pathlib.Path) -> Any:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _validate(self, instance: Any, schema_name: str) -> None:
        if self.validate_schema:
            schema = self._load_json(self.schema_dir / schema_name)
            validate(instance=instance, schema=schema)

    # --- 公開API ------------------------------------------------------

    def load_groups(self, path: str | pathlib.Path) -> List[AnnotationGroup]:
        """groups.json → AnnotationGroup のリスト"""
        data = self._load_json(path)
        return self.parse_groups(data)

    def parse_groups(self, data: Any) -> List[AnnotationGroup]:
        self._validate(data, "annotation_groups.schema.json")

        groups: List[AnnotationGroup] = []
        claimed: Set[str] = set()
        for item in data["groups"]:
            gid = item["group_id"]
            members: List[Annotation] = []
            seen: Set[str] = set()
            for a in item["annotations"]:
                aid = a["id"]
                if aid in seen:
                    warnings.warn(f"Duplicate annotation {aid} in group {gid}")
                    continue
                if aid in claimed:
                    # 1つのアノテーションは1つのクラスタにしか属さない
                    warnings.warn(f"Annotation {aid} already belongs to another group; skipped in {gid}")
                    continue
                seen.add(aid)
                members.append(Annotation(
                    identifier=aid,
                    coordinate=Coordinate(float(a["lat"]), float(a["lon"])),
                    label=a.get("label"),
                ))
            claimed |= seen

            coord = item.get("coordinate")
            groups.append(AnnotationGroup(
                group_id=gid,
                annotations=members,
                coordinate=Coordinate(float(coord["lat"]), float(coord["lon"])) if coord else None,
            ))
        return groups

    def build_clusters(
        self,
        groups: Iterable[AnnotationGroup],
        strategy: Union[CoordinateStrategy, str, None] = "centroid",
    ) -> List[tuple[str, Cluster]]:
        """AnnotationGroup → (group_id, Cluster)。メンバー確定後に一度だけ座標を計算する"""
        if isinstance(strategy, str):
            strategy = get_strategy(strategy)

        clusters: List[tuple[str, Cluster]] = []
        for g in groups:
            initial: Optional[Coordinate] = g.coordinate
            if initial is None:
                if not g.annotations:
                    warnings.warn(f"Group {g.group_id} has no annotations and no coordinate")
                    continue
                initial = g.annotations[0].coordinate
            elif not g.annotations:
                warnings.warn(f"Group {g.group_id} has no annotations")

            cluster = Cluster.with_coordinate(initial, strategy)
            for a in g.annotations:
                cluster.add_annotation(a)
            cluster.update_coordinate()
            clusters.append((g.group_id, cluster))
        return clusters
