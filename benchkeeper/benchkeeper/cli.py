import argparse
import logging
import sys

from benchkeeper.cleanup import cleanup_old_results
from benchkeeper.codec import DEFAULT_CODEC
from benchkeeper.config import load_settings, require_result_dir
from benchkeeper.errors import BenchKeeperError
from benchkeeper.formatter import format_listing, format_table
from benchkeeper.lister import DETAIL_FIELDS, list_results, scenarios_in_result_dir
from benchkeeper.scenarios import list_scenario_modules


def _list(args, settings):
    rows = list_results(
        require_result_dir(settings),
        include_scenarios=args.include_scenarios,
        exclude_scenarios=args.exclude_scenarios,
        module_startup=args.module_startup,
        query=args.query,
        latest=args.latest,
        with_result=args.fmt,
    )
    if args.fmt:
        sys.stdout.write(format_listing(rows))
        return 0
    if args.detail:
        if args.json:
            print(DEFAULT_CODEC.encode([r.to_dict() for r in rows]))
        elif rows:
            print(format_table([r.to_dict() for r in rows], DETAIL_FIELDS))
        return 0
    filenames = [r.filename for r in rows]
    if args.json:
        print(DEFAULT_CODEC.encode(filenames))
    else:
        for f in filenames:
            print(f)
    return 0


def _cleanup(args, settings):
    res = cleanup_old_results(
        require_result_dir(settings),
        num_keep=settings.num_keep,
        query=args.query,
        dry_run=args.dry_run,
    )
    if args.json:
        print(DEFAULT_CODEC.encode(res.as_struct()))
    else:
        for item in res.results:
            print(f"{item.status} {item.message}: {item.item_id}")
    return 0 if not res.failed else 1


def _scenarios(args, settings):
    for name in list_scenario_modules(query=args.query, namespace=settings.scenario_namespace):
        print(name)
    return 0


def _result_scenarios(args, settings):
    for name in scenarios_in_result_dir(require_result_dir(settings), word=args.word):
        print(name)
    return 0


def _add_result_dir(p):
    p.add_argument("--result-dir", help="directory holding the result files")


def build_parser():
    parser = argparse.ArgumentParser(prog="bk", description="Manage bencher result files")
    parser.add_argument("--config", help="YAML config file (default: ~/.config/benchkeeper.yaml)")
    parser.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    sub = parser.add_subparsers(dest="subcommand")

    p_list = sub.add_parser("list", help="list results in the result directory")
    _add_result_dir(p_list)
    p_list.add_argument("query", nargs="*", help="words to match against cpu, filename and scenario")
    p_list.add_argument("-l", "--detail", action="store_true", help="show scenario, time and cpu")
    p_list.add_argument("--include-scenario", dest="include_scenarios", action="append", default=[])
    p_list.add_argument("--exclude-scenario", dest="exclude_scenarios", action="append", default=[])
    p_list.add_argument("--module-startup", action=argparse.BooleanOptionalAction, default=None)
    p_list.add_argument(
        "--latest",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="only list (or with --no-latest, do not list) the latest result for every scenario+CPU",
    )
    p_list.add_argument("--fmt", action="store_true", help="display each result as a table")
    p_list.add_argument("--json", action="store_true", help="print JSON")

    p_cleanup = sub.add_parser("cleanup", help="delete old results")
    _add_result_dir(p_cleanup)
    p_cleanup.add_argument("query", nargs="*")
    p_cleanup.add_argument("--num-keep", type=int, help="number of old results to keep (default: 0)")
    p_cleanup.add_argument("--dry-run", action="store_true", help="only report what would be deleted")
    p_cleanup.add_argument("--json", action="store_true", help="print the multi-status result as JSON")

    p_scen = sub.add_parser("scenarios", help="list installed scenario modules")
    p_scen.add_argument("query", nargs="?", help="glob such as 'Accessors/*'")
    p_scen.add_argument("--namespace", dest="scenario_namespace")

    p_rscen = sub.add_parser("result-scenarios", help="list scenarios present in the result directory")
    _add_result_dir(p_rscen)
    p_rscen.add_argument("word", nargs="?", default="")

    return parser


COMMANDS = {
    "list": _list,
    "cleanup": _cleanup,
    "scenarios": _scenarios,
    "result-scenarios": _result_scenarios,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.subcommand is None:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides = {
        "result_dir": getattr(args, "result_dir", None),
        "num_keep": getattr(args, "num_keep", None),
        "scenario_namespace": getattr(args, "scenario_namespace", None),
    }
    try:
        settings = load_settings(overrides, config_path=args.config)
        return COMMANDS[args.subcommand](args, settings)
    except (BenchKeeperError, ValueError) as exc:
        print(f"bk: error: {exc}", file=sys.stderr)
        return 2
