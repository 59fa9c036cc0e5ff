"""CLI entry point for flattening a recorded result tree."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from testset_report.display.loading import load_renderer
from testset_report.display.mirror import display_tree
from testset_report.flattener import flatten
from testset_report.models.config import ReportConfig
from testset_report.models.group import (
    Group,
    elapsed,
    hostname,
    properties,
    start_time,
)
from testset_report.models.outcome import Leaf, attributed_duration, unwrap
from testset_report.scanner import exit_code
from testset_report.tree_loader import load_result_tree


def run(result_file: Path, renderer_key: str, config: ReportConfig) -> int:
    """Flatten the result tree in ``result_file`` and return the exit code."""
    log = logging.getLogger("testset_report")

    log.info("Loading result tree: %s", result_file)
    root = load_result_tree(result_file)

    renderer = load_renderer(renderer_key)
    # Already sealed by the engine that produced it: display and flatten only
    display_tree(root, renderer)
    flatten(root, config)
    log.info("Flattened %s into %d group(s)", root.description, len(root.children))

    output = format_output(root)
    print(json.dumps(output, indent=2, default=str))

    return exit_code(root, config)


def format_output(root: Group) -> dict[str, Any]:
    """Format a flattened result tree for JSON output."""
    groups = [child for child in root.children if isinstance(child, Group)]
    leaves = [unwrap(leaf) for group in groups for leaf in group.children]

    return {
        "description": root.description,
        "hostname": hostname(root),
        "start_time": start_time(root).isoformat(),
        "elapsed": elapsed(root).total_seconds(),
        "properties": properties(root) or {},
        "total": len(leaves),
        "passed": sum(1 for o in leaves if o.kind == "pass"),
        "failed": sum(1 for o in leaves if o.kind == "fail"),
        "errors": sum(1 for o in leaves if o.kind == "error"),
        "broken": sum(1 for o in leaves if o.kind == "broken"),
        "groups": [format_group(group) for group in groups],
    }


def format_group(group: Group) -> dict[str, Any]:
    """Format one flattened group and its outcomes."""
    return {
        "description": group.description,
        "hostname": hostname(group),
        "start_time": start_time(group).isoformat(),
        "elapsed": elapsed(group).total_seconds(),
        "properties": properties(group) or {},
        "results": [
            format_leaf(leaf) for leaf in group.children if not isinstance(leaf, Group)
        ],
    }


def format_leaf(leaf: Leaf) -> dict[str, Any]:
    outcome = unwrap(leaf)
    return {
        "kind": outcome.kind,
        "duration": attributed_duration(leaf).total_seconds(),
        "expression": outcome.expression,
        "message": outcome.message,
        "source": outcome.source,
    }


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Flatten a nested test result tree into report shape"
    )
    parser.add_argument(
        "result_file",
        type=Path,
        help="JSON document describing the result tree",
    )
    parser.add_argument(
        "--renderer",
        default="log",
        help="Display renderer key (log, silent)",
    )
    parser.add_argument(
        "--top-level-description",
        default="Top level tests",
        help="Name of the group collecting outcomes recorded on the root",
    )
    parser.add_argument(
        "--sort-property-keys",
        action="store_true",
        help="Propagate properties in sorted key order",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    config = ReportConfig(
        top_level_description=args.top_level_description,
        sort_property_keys=args.sort_property_keys,
    )
    sys.exit(run(args.result_file, args.renderer, config))


if __name__ == "__main__":  # pragma: no cover
    main()
