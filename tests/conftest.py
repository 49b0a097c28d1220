import json

import pytest

from mapcluster import Annotation, Coordinate


@pytest.fixture
def make_annotation():
    """Factory for annotations at (lat, lon)."""
    counter = {"n": 0}

    def _make(lat, lon, identifier=None, label=None):
        if identifier is None:
            counter["n"] += 1
            identifier = f"a{counter['n']}"
        return Annotation(identifier, Coordinate(lat, lon), label=label)

    return _make


@pytest.fixture
def groups_data():
    """Two groups as produced by an external grouping pass."""
    return {
        "groups": [
            {
                "group_id": "shibuya",
                "annotations": [
                    {"id": "p1", "lat": 35.6595, "lon": 139.7005, "label": "Hachiko"},
                    {"id": "p2", "lat": 35.6580, "lon": 139.7016},
                    {"id": "p3", "lat": 35.6610, "lon": 139.7040},
                ],
            },
            {
                "group_id": "line",
                "coordinate": {"lat": 1.0, "lon": 1.0},
                "annotations": [
                    {"id": "q1", "lat": 0.0, "lon": 0.0},
                    {"id": "q2", "lat": 0.0, "lon": 2.0},
                    {"id": "q3", "lat": 0.0, "lon": 0.9},
                ],
            },
        ]
    }


@pytest.fixture
def groups_file(tmp_path, groups_data):
    path = tmp_path / "groups.json"
    path.write_text(json.dumps(groups_data), encoding="utf-8")
    return path
