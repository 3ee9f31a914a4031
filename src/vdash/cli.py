"""vdash command-line interface with subcommands.

Usage:
    vdash-cli serve
    vdash-cli srt <script.txt> [-o output.srt] [--max-length 500] [--block-seconds 30]
    vdash-cli stages [--state data.json]
    vdash-cli drafts [-q query] [--state data.json]
    vdash-cli export-backup [-o backup.json] [--state data.json]
    vdash-cli import-backup <backup.json> [--state data.json]
"""

import argparse
import logging
import sys
from pathlib import Path

from vdash.config import settings
from vdash.errors import BackupValidationError, StateStoreError
from vdash.services import queries
from vdash.services.persistence import (
    JSONStateStore,
    export_backup,
    load_state,
    read_backup,
)
from vdash.services.subtitles import SubtitleChunker
from vdash.services.workflow import WorkflowService


def _open_store(args: argparse.Namespace) -> JSONStateStore:
    if args.state:
        return JSONStateStore(Path(args.state).resolve())
    settings.ensure_directories()
    return JSONStateStore(settings.state_path)


def _load_workflow(store: JSONStateStore) -> WorkflowService:
    try:
        state = load_state(store.load(), default_theme=settings.default_theme)
    except StateStoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    return WorkflowService.from_state(state)


# --- serve ---

def cmd_serve(args: argparse.Namespace) -> None:
    from vdash.main import main as run_server

    run_server()


# --- srt ---

def cmd_srt(args: argparse.Namespace) -> None:
    """Generate an SRT file from a plain-text script."""
    script_path = Path(args.input).resolve()
    if not script_path.exists():
        print(f"Error: file not found: {script_path}", file=sys.stderr)
        sys.exit(1)

    chunker = SubtitleChunker(
        max_chunk_length=args.max_length,
        block_duration_seconds=args.block_seconds,
    )
    try:
        content = chunker.generate_srt(script_path.read_text(encoding="utf-8"))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if content is None:
        print("Script is empty, nothing to write.", file=sys.stderr)
        sys.exit(1)

    output_path = Path(args.output) if args.output else script_path.with_suffix(".srt")
    output_path.write_text(content, encoding="utf-8")
    print(f"Subtitles written: {output_path}")


# --- stages ---

def cmd_stages(args: argparse.Namespace) -> None:
    """Print the stage template."""
    wf = _load_workflow(_open_store(args))
    for i, stage in enumerate(wf.template, 1):
        print(f"{i}. {stage.name} [{stage.id}]")
        for task in stage.tasks:
            print(f"     - {task.label} ({task.key})")


# --- drafts ---

def cmd_drafts(args: argparse.Namespace) -> None:
    """Print drafts in board order with their current stage."""
    wf = _load_workflow(_open_store(args))
    drafts = queries.search_by_title(queries.sort_drafts(wf.repository.drafts), args.query)
    if not drafts:
        print("No drafts.")
        return

    overdue = {v.id for v in wf.overdue()}
    for video in drafts:
        post_date = video.post_date.isoformat() if video.post_date else "-"
        done = sum(1 for item in video.checklist if item.completed)
        marker = " (overdue)" if video.id in overdue else ""
        print(f"#{video.video_number or '-'}  {post_date}  {video.title or '(untitled)'}{marker}")
        print(f"     stage: {wf.classify(video)}  tasks: {done}/{len(video.checklist)}")


# --- export-backup ---

def cmd_export_backup(args: argparse.Namespace) -> None:
    wf = _load_workflow(_open_store(args))
    if args.output:
        target = Path(args.output)
    else:
        settings.ensure_directories()
        target = settings.backup_dir
    path = export_backup(wf.to_state(), target)
    print(f"Backup written: {path}")


# --- import-backup ---

def cmd_import_backup(args: argparse.Namespace) -> None:
    """Replace the stored state with the contents of a backup file."""
    try:
        state = read_backup(Path(args.input).resolve())
    except (FileNotFoundError, BackupValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    store = _open_store(args)
    wf = _load_workflow(store)
    promoted = wf.replace_state(state)
    store.save(wf.to_state().to_document())

    print(f"Backup imported: {args.input}")
    print(f"  drafts: {len(wf.repository.drafts)}")
    print(f"  published: {len(wf.repository.published)}")
    if promoted:
        print(f"  promoted on import: {len(promoted)}")


# --- Main CLI ---

def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    parser = argparse.ArgumentParser(
        prog="vdash-cli",
        description="vdash - video production dashboard CLI",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- serve ---
    subparsers.add_parser("serve", help="Run the API server")

    # --- srt ---
    p_srt = subparsers.add_parser("srt", help="Generate SRT subtitles from a script file")
    p_srt.add_argument("input", type=str, help="Plain-text script file")
    p_srt.add_argument("-o", "--output", type=str, help="Output SRT path (default: next to the script)")
    p_srt.add_argument("--max-length", type=int, default=settings.subtitle_max_chunk_length, help="Maximum characters per block")
    p_srt.add_argument("--block-seconds", type=int, default=settings.subtitle_block_seconds, help="Seconds per block")

    # --- stages ---
    p_stages = subparsers.add_parser("stages", help="Show the stage template")
    p_stages.add_argument("--state", type=str, help="State file (default: from settings)")

    # --- drafts ---
    p_drafts = subparsers.add_parser("drafts", help="List drafts with their stage")
    p_drafts.add_argument("-q", "--query", default="", help="Title filter")
    p_drafts.add_argument("--state", type=str, help="State file (default: from settings)")

    # --- export-backup ---
    p_export = subparsers.add_parser("export-backup", help="Export a JSON backup")
    p_export.add_argument("-o", "--output", type=str, help="Output file or directory (default: backup dir)")
    p_export.add_argument("--state", type=str, help="State file (default: from settings)")

    # --- import-backup ---
    p_import = subparsers.add_parser("import-backup", help="Replace state from a JSON backup")
    p_import.add_argument("input", type=str, help="Backup file")
    p_import.add_argument("--state", type=str, help="State file (default: from settings)")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Dispatch
    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "srt":
        cmd_srt(args)
    elif args.command == "stages":
        cmd_stages(args)
    elif args.command == "drafts":
        cmd_drafts(args)
    elif args.command == "export-backup":
        cmd_export_backup(args)
    elif args.command == "import-backup":
        cmd_import_backup(args)


if __name__ == "__main__":
    main()
