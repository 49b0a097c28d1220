# cli.py
import argparse
from .config import ClusterConfig, load_json
from .cluster.strategies import STRATEGIES
from .model.loader import AnnotationLoader

def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="mapcluster",
        description="グルーピング済みアノテーションからクラスタ座標を計算して CSV 出力する")
    p.add_argument("--config")
    p.add_argument("--input", help="groups.json")
    p.add_argument("--strategy", choices=sorted(STRATEGIES))
    p.add_argument("--precision", type=int)
    p.add_argument("--print-annotations", dest="print_annotations",
                   action="store_true", default=None)
    p.add_argument("--no-validate", dest="validate_schema",
                   action="store_false", default=None)
    return p.parse_args(argv)

def build_config(args) -> ClusterConfig:
    cfg_dict = load_json(args.config)
    # JSONをデフォルトに、CLIで上書き
    for k, v in vars(args).items():
        if k == "config": continue
        if v is not None: cfg_dict[k] = v
    if "input" not in cfg_dict:
        raise ValueError("missing required args (via CLI or config): input")
    return ClusterConfig(**cfg_dict)

def main(argv=None):
    cfg = build_config(parse_args(argv))

    loader = AnnotationLoader(validate_schema=cfg.validate_schema)
    groups = loader.load_groups(cfg.input)
    clusters = loader.build_clusters(groups, cfg.strategy)

    n = cfg.precision
    print("# cluster_id,count,lat,lon")
    for gid, c in clusters:
        print(f"{gid},{c.count},{c.coordinate.latitude:.{n}f},{c.coordinate.longitude:.{n}f}")

    if cfg.print_annotations:
        print("# cluster_id,annotation_id,lat,lon")
        for gid, c in clusters:
            for a in c:
                print(f"{gid},{a.identifier},{a.coordinate.latitude:.{n}f},{a.coordinate.longitude:.{n}f}")

if __name__ == "__main__":
    main()
