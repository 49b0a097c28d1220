# config.py
from dataclasses import dataclass
from pathlib import Path
import json

@dataclass
class ClusterConfig:
    input: str
    strategy: str = "centroid"
    validate_schema: bool = True
    precision: int = 8
    print_annotations: bool = False

def load_json(path: str | None) -> dict:
    if not path: return {}
    p = Path(path)
    if not p.exists(): raise FileNotFoundError(path)
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("config json must be an object")
    return data
