"""
Unit tests for the annotation group loader.
"""

import jsonschema
import pytest

from mapcluster import Coordinate
from mapcluster.cluster import BottomStrategy
from mapcluster.model.loader import AnnotationLoader
from mapcluster.model.models import AnnotationGroup


@pytest.fixture
def loader():
    return AnnotationLoader()


def test_load_groups(loader, groups_file):
    groups = loader.load_groups(groups_file)
    assert [g.group_id for g in groups] == ["shibuya", "line"]
    shibuya = groups[0]
    assert [a.identifier for a in shibuya.annotations] == ["p1", "p2", "p3"]
    assert shibuya.annotations[0].label == "Hachiko"
    assert shibuya.annotations[1].label is None
    assert shibuya.coordinate is None
    assert groups[1].coordinate == Coordinate(1.0, 1.0)


def test_schema_rejects_out_of_range_latitude(loader):
    data = {"groups": [{"group_id": "g", "annotations": [{"id": "a", "lat": 91, "lon": 0}]}]}
    with pytest.raises(jsonschema.ValidationError):
        loader.parse_groups(data)


def test_schema_requires_groups(loader):
    with pytest.raises(jsonschema.ValidationError):
        loader.parse_groups({"clusters": []})


def test_duplicate_annotation_in_group_warns(loader):
    data = {"groups": [{"group_id": "g", "annotations": [
        {"id": "a", "lat": 0, "lon": 0},
        {"id": "a", "lat": 1, "lon": 1},
    ]}]}
    with pytest.warns(UserWarning, match="Duplicate annotation a"):
        groups = loader.parse_groups(data)
    assert len(groups[0].annotations) == 1
    assert groups[0].annotations[0].coordinate == Coordinate(0.0, 0.0)


def test_annotation_claimed_by_two_groups_warns(loader):
    data = {"groups": [
        {"group_id": "g1", "annotations": [{"id": "a", "lat": 0, "lon": 0}]},
        {"group_id": "g2", "annotations": [{"id": "a", "lat": 0, "lon": 0},
                                           {"id": "b", "lat": 1, "lon": 1}]},
    ]}
    with pytest.warns(UserWarning, match="already belongs to another group"):
        groups = loader.parse_groups(data)
    assert [a.identifier for a in groups[1].annotations] == ["b"]


def test_build_clusters_derives_coordinates(loader, groups_file):
    groups = loader.load_groups(groups_file)
    clusters = dict(loader.build_clusters(groups, "nearest_centroid"))
    assert clusters["line"].coordinate == Coordinate(0.0, 0.9)
    assert clusters["line"].count == 3
    assert clusters["shibuya"].coordinate in [a.coordinate for a in clusters["shibuya"]]
    for a in clusters["shibuya"]:
        assert a.cluster is clusters["shibuya"]


def test_build_clusters_accepts_strategy_object(loader, groups_file):
    groups = loader.load_groups(groups_file)
    clusters = dict(loader.build_clusters(groups, BottomStrategy()))
    assert clusters["shibuya"].coordinate == Coordinate(35.6580, 139.7016)


def test_empty_group_keeps_initial_coordinate(loader):
    groups = [AnnotationGroup("empty", [], Coordinate(3.0, 4.0))]
    with pytest.warns(UserWarning, match="has no annotations"):
        clusters = loader.build_clusters(groups)
    assert clusters[0][1].coordinate == Coordinate(3.0, 4.0)
    assert clusters[0][1].count == 0


def test_empty_group_without_coordinate_is_skipped(loader):
    with pytest.warns(UserWarning, match="no coordinate"):
        clusters = loader.build_clusters([AnnotationGroup("empty")])
    assert clusters == []


def test_validation_can_be_disabled(tmp_path):
    loader = AnnotationLoader(validate_schema=False, schema_dir=tmp_path / "missing")
    groups = loader.parse_groups({"groups": [{"group_id": "g", "annotations": []}]})
    assert groups[0].annotations == []
