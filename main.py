"""Main entry point for workflow-lens."""

import argparse
import asyncio
import importlib.metadata
import json
from pathlib import Path

import aiofiles

from config import Config
from diagram import compile_selection, layout_diagram, mermaid_for_selection
from lint import (
    LintStatusSummary,
    WorkflowKind,
    apply_fixes,
    get_lint_status_summary,
    lint_workflow_file,
)
from utils import get_log_file_path, get_logger, setup_logger, terminal_ui
from utils.runtime import ensure_runtime_dirs
from workflows import (
    WorkflowGraph,
    WorkflowScanner,
    group_workflows_by_namespace,
    infer_workflow_kind,
    parse_workflow_name,
)
from workflows.parser import read_text

logger = get_logger(__name__)

KIND_CHOICES = [kind.value for kind in WorkflowKind]


def _collect_files(paths: list[str]) -> tuple[list[Path], list[str]]:
    """Expand directories into the markdown files below them."""
    files: list[Path] = []
    missing: list[str] = []
    for raw in paths:
        path = Path(raw).expanduser()
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*.md") if p.is_file()))
        elif path.is_file():
            files.append(path)
        else:
            missing.append(raw)
    return files, missing


async def _write_text(path: Path, content: str) -> None:
    async with aiofiles.open(path, "w", encoding="utf-8") as handle:
        await handle.write(content)


async def _lint_files(files: list[Path], kind: str | None, fix: bool) -> list[dict]:
    reports = []
    for path in files:
        file_kind = WorkflowKind.parse(kind) if kind else infer_workflow_kind(path)
        if file_kind is None:
            logger.debug(f"Skipping {path}: cannot tell agent, command or skill apart")
            continue

        try:
            content = await read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            terminal_ui.print_warning(f"Skipping {path}: {e}")
            continue
        fixed_messages: list[str] = []
        if fix:
            fixed, applied = apply_fixes(content, file_kind, max_passes=Config.MAX_FIX_PASSES)
            if fixed != content:
                await _write_text(path, fixed)
                content = fixed
                fixed_messages = [d.message for d in applied]

        result = lint_workflow_file(content, file_kind)
        reports.append(
            {"path": path, "kind": file_kind, "result": result, "fixed": fixed_messages}
        )
    return reports


def run_lint(args: argparse.Namespace) -> int:
    files, missing = _collect_files(args.paths)
    for raw in missing:
        terminal_ui.print_error(f"No such file or directory: {raw}", title="Lint Error")
    if missing:
        return 2

    reports = asyncio.run(_lint_files(files, args.type, args.fix))
    if not reports:
        terminal_ui.print_warning(
            "No workflow files found. "
            "Pass --type for files outside agents/, commands/ or skills/."
        )
        return 0

    errors = sum(len(r["result"].errors) for r in reports)
    warnings = sum(len(r["result"].warnings) for r in reports)

    if args.json:
        payload = [
            {
                "path": str(r["path"]),
                "kind": r["kind"].value,
                "status": get_lint_status_summary(r["result"]).status.value,
                "fixed": r["fixed"],
                **r["result"].to_dict(),
            }
            for r in reports
        ]
        print(json.dumps(payload, indent=2))
    else:
        for report in reports:
            terminal_ui.print_fixes_applied(str(report["path"]), report["fixed"])
            terminal_ui.print_lint_result(str(report["path"]), report["result"])
        terminal_ui.print_lint_summary(len(reports), errors, warnings)

    return 1 if errors else 0


def _load_graph(directory: str | None) -> WorkflowGraph:
    return asyncio.run(WorkflowScanner(directory).load())


def run_graph(args: argparse.Namespace) -> int:
    graph = _load_graph(args.dir)
    entity = graph.find_by_name(args.name, args.type)
    if entity is None:
        kind = args.type or "workflow"
        terminal_ui.print_error(f"No {kind} named '{args.name}' found", title="Graph Error")
        return 1

    node = entity.node
    if args.format == "json":
        try:
            diagram = layout_diagram(compile_selection(graph, node), direction=args.direction)
        except ValueError as e:
            terminal_ui.print_error(str(e), title="Layout Error")
            return 1
        print(json.dumps(diagram.to_dict(), indent=2))
        return 0

    source = mermaid_for_selection(graph, node)
    if source is None:
        terminal_ui.print_error(f"No diagram for {node.type} '{node.id}'", title="Graph Error")
        return 1
    print(source)
    return 0


async def _lint_statuses(graph: WorkflowGraph) -> dict[str, LintStatusSummary]:
    statuses = {}
    for kind in KIND_CHOICES:
        for entity in graph.entities(kind):
            try:
                content = await read_text(entity.source_path)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Could not read {entity.source_path}: {e}")
                continue
            result = lint_workflow_file(content, kind)
            statuses[f"{kind}:{entity.id}"] = get_lint_status_summary(result)
    return statuses


def run_list(args: argparse.Namespace) -> int:
    scanner = WorkflowScanner(args.dir)
    graph = asyncio.run(scanner.load())
    statuses = asyncio.run(_lint_statuses(graph))

    terminal_ui.print_header("workflow-lens", subtitle=str(scanner.base_dir))
    for kind in KIND_CHOICES:
        entities = graph.entities(kind)
        if not entities:
            continue
        rows = []
        for group, members in sorted(group_workflows_by_namespace(entities).items()):
            for entity in sorted(members, key=lambda e: e.name):
                summary = statuses.get(f"{kind}:{entity.id}")
                rows.append(
                    (
                        group,
                        parse_workflow_name(entity.name).display_name,
                        entity.description,
                        summary.status.value if summary else "errors",
                        summary.text if summary else "unreadable",
                    )
                )
        terminal_ui.print_workflow_table(kind, rows)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wflens",
        description="Lint agent, command and skill files and draw their dependency graphs",
    )

    try:
        version = importlib.metadata.version("workflow-lens")
    except importlib.metadata.PackageNotFoundError:
        version = "dev"
    parser.add_argument("--version", "-V", action="version", version=f"wflens {version}")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging to ~/.workflow-lens/logs/",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    lint_parser = subparsers.add_parser("lint", help="Lint workflow markdown files")
    lint_parser.add_argument("paths", nargs="+", help="Files or directories to lint")
    lint_parser.add_argument(
        "--type",
        "-t",
        choices=KIND_CHOICES,
        help="Workflow kind (inferred from agents/, commands/ or SKILL.md when omitted)",
    )
    lint_parser.add_argument("--fix", action="store_true", help="Apply fixable diagnostics")
    lint_parser.add_argument("--json", action="store_true", help="Print results as JSON")
    lint_parser.set_defaults(handler=run_lint)

    graph_parser = subparsers.add_parser("graph", help="Print the dependency graph of a workflow")
    graph_parser.add_argument("name", help="Agent, command or skill id or name")
    graph_parser.add_argument("--type", "-t", choices=KIND_CHOICES, help="Workflow kind")
    graph_parser.add_argument(
        "--format", "-f", choices=["mermaid", "json"], default="mermaid", help="Output format"
    )
    graph_parser.add_argument(
        "--direction", choices=["TB", "LR"], default=None, help="Layout direction for JSON"
    )
    graph_parser.add_argument("--dir", "-d", default=None, help="Workflows directory")
    graph_parser.set_defaults(handler=run_graph)

    list_parser = subparsers.add_parser("list", help="List agents, commands and skills")
    list_parser.add_argument("--dir", "-d", default=None, help="Workflows directory")
    list_parser.set_defaults(handler=run_list)

    return parser


def main() -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    # Create the logs directory only in verbose mode
    ensure_runtime_dirs(create_logs=args.verbose)

    # Initialize logging only in verbose mode
    if args.verbose:
        setup_logger()

    try:
        Config.validate()
    except ValueError as e:
        terminal_ui.print_error(str(e), title="Configuration Error")
        return 2

    exit_code = args.handler(args)

    log_file = get_log_file_path()
    if args.verbose and log_file:
        terminal_ui.print_log_location(log_file)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
