import argparse
import sys

from bagtree.const import (
    BT_DEFAULT_FOREST_F_RATIO,
    BT_DEFAULT_N_TREES,
    BT_DEFAULT_RATIO_CLAMP,
    BT_RATIO_CLAMPS,
)
from bagtree.models.eval.evaluator import format_report
from bagtree.models.experiments.runner import ExperimentRunner


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bagtree", description="Decision tree, bagging and random forest classifiers.")
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--full", action="store_true", help="print every measure instead of the raw counts")
    common.add_argument("--seed", type=int, default=None)
    common.add_argument("--metrics-path", default=None, help="directory to write the metrics JSON to")
    common.add_argument("--log-path", default=None, help="file to additionally write the run log to")

    sub = ap.add_subparsers(dest="model_name", required=True)

    tree = sub.add_parser("tree", parents=[common], help="single gain ratio decision tree")
    tree.add_argument("train")
    tree.add_argument("test")

    bagging = sub.add_parser("bagging", parents=[common], help="bagging ensemble of decision trees")
    bagging.add_argument("k", type=int, help="number of trees in the bag")
    bagging.add_argument("train")
    bagging.add_argument("test")
    bagging.add_argument("--n-jobs", type=int, default=None)

    forest = sub.add_parser("forest", parents=[common], help="random forest")
    forest.add_argument("train")
    forest.add_argument("test")
    forest.add_argument("--k", type=int, default=BT_DEFAULT_N_TREES, help="number of trees in the forest")
    forest.add_argument("--f-ratio", type=float, default=BT_DEFAULT_FOREST_F_RATIO,
                        help="ratio of attributes considered at each split")
    forest.add_argument("--ratio-clamp", choices=sorted(BT_RATIO_CLAMPS), default=BT_DEFAULT_RATIO_CLAMP)
    forest.add_argument("--n-jobs", type=int, default=None)
    return ap


def _model_params(args: argparse.Namespace) -> dict:
    if args.model_name == "tree":
        return {"seed": args.seed}
    if args.model_name == "bagging":
        return {"n_trees": args.k, "seed": args.seed, "n_jobs": args.n_jobs}
    return {"n_trees": args.k, "f_ratio": args.f_ratio, "ratio_clamp": args.ratio_clamp,
            "seed": args.seed, "n_jobs": args.n_jobs}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    runner = ExperimentRunner(
        model_config={"model_name": args.model_name, "params": _model_params(args), "metrics_path": args.metrics_path,
                      "log_path": args.log_path},
        data_config={"train_path": args.train, "test_path": args.test, "seed": args.seed},
    )
    matrix = runner.run()
    print(format_report(matrix, full=args.full))
    return 0


if __name__ == "__main__":
    sys.exit(main())
