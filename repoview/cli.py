"""Command-line front door for repoview.

Each subcommand runs one collector synchronously and prints a plain-text
rendering of its snapshot, which makes the pipeline usable from scripts and
easy to poke at without a windowing shell.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .collectors import (
    collect_diff,
    collect_file_load,
    collect_file_syntax_highlight,
    collect_file_tree,
    collect_git_status,
)
from .config import load_dark_theme, load_show_hidden, load_syntax_max_lines
from .git import discover_repository
from .log import default_log_file, setup_logging
from .snapshots import (
    DiffLine,
    DiffLineType,
    DiffSnapshot,
    FileEntry,
    FileLoadSnapshot,
    FileSyntaxSnapshot,
    FileTreeSnapshot,
    GitStatusSnapshot,
    HighlightedLine,
)
from .textio import split_lines

CLI_TAB_ID = 0

_DIFF_PREFIX = {
    DiffLineType.ADDITION: "+",
    DiffLineType.DELETION: "-",
    DiffLineType.CONTEXT: " ",
}


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _existing_path(raw: str) -> Path:
    path = Path(raw).expanduser()
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    return path


def _format_entries(title: str, entries: tuple[FileEntry, ...]) -> list[str]:
    if not entries:
        return []
    return [f"{title}:", *(f"  {entry.status.value} {entry.path}" for entry in entries), ""]


def format_status(snapshot: GitStatusSnapshot) -> str:
    if not snapshot.is_git_repo:
        return f"Not a git repository: {snapshot.repo_path}\n"
    out = [f"On branch {snapshot.branch_name} ({snapshot.repo_name})", ""]
    out.extend(_format_entries("Staged changes", snapshot.staged))
    out.extend(_format_entries("Unstaged changes", snapshot.unstaged))
    out.extend(_format_entries("Untracked files", snapshot.untracked))
    if snapshot.total_changes == 0:
        out.append("Working tree clean")
    return "\n".join(out).rstrip("\n") + "\n"


def format_tree(snapshot: FileTreeSnapshot) -> str:
    out = [f"{snapshot.current_dir}"]
    out.extend(f"  {entry.name}/" if entry.is_dir else f"  {entry.name}" for entry in snapshot.entries)
    return "\n".join(out) + "\n"


def _diff_line_body(line: DiffLine, word_diff: bool) -> str:
    if not word_diff or line.inline_changes is None:
        return line.content
    open_mark, close_mark = ("[-", "-]") if line.line_type is DiffLineType.DELETION else ("{+", "+}")
    return "".join(
        f"{open_mark}{span.text}{close_mark}" if span.changed else span.text for span in line.inline_changes
    )


def format_diff(snapshot: DiffSnapshot, word_diff: bool = False) -> str:
    """Render diff rows with gutters; ``word_diff`` marks changed words git-style."""
    if not snapshot.lines:
        return f"No changes for {snapshot.file_path}\n"
    out: list[str] = []
    for line in snapshot.lines:
        if line.line_type is DiffLineType.HEADER:
            out.append(line.content)
            continue
        old = "" if line.old_line_num is None else str(line.old_line_num)
        new = "" if line.new_line_num is None else str(line.new_line_num)
        out.append(f"{old:>5} {new:>5} {_DIFF_PREFIX[line.line_type]}{_diff_line_body(line, word_diff)}")
    return "\n".join(out) + "\n"


def _ansi_line(line: HighlightedLine) -> str:
    parts: list[str] = []
    for span in line.spans:
        codes: list[str] = []
        if span.bold:
            codes.append("1")
        if span.italic:
            codes.append("3")
        if span.color and len(span.color) == 7:
            red, green, blue = (int(span.color[i : i + 2], 16) for i in (1, 3, 5))
            codes.append(f"38;2;{red};{green};{blue}")
        parts.append(f"\033[{';'.join(codes)}m{span.text}\033[0m" if codes else span.text)
    return "".join(parts)


def format_file(load: FileLoadSnapshot, syntax: FileSyntaxSnapshot | None = None, color: bool = False) -> str:
    """Render a loaded file; highlighted lines replace their plain prefix when ``color`` is set."""
    if load.image_path is not None:
        return f"Image: {load.image_path}\n"
    if load.webview_content is not None:
        return f"Web preview ready ({len(load.webview_content)} characters of HTML)\n"
    lines = split_lines(load.file_content)
    if color and syntax is not None and syntax.syntax_highlight_lines is not None:
        highlighted = [_ansi_line(line) for line in syntax.syntax_highlight_lines]
        lines[: len(highlighted)] = highlighted
    return "".join(f"{line}\n" for line in lines)


def _run_status(args: argparse.Namespace) -> None:
    path = _existing_path(args.path)
    sys.stdout.write(format_status(collect_git_status(CLI_TAB_ID, path)))


def _run_tree(args: argparse.Namespace) -> None:
    path = _existing_path(args.path)
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")
    show_hidden = args.hidden or load_show_hidden()
    sys.stdout.write(format_tree(collect_file_tree(CLI_TAB_ID, path, show_hidden)))


def _relative_to_repo(file_arg: str, repo_root: Path) -> str:
    candidate = Path(file_arg).expanduser().resolve()
    try:
        return candidate.relative_to(repo_root.resolve()).as_posix()
    except ValueError:
        return Path(file_arg).as_posix()


def _run_diff(args: argparse.Namespace) -> None:
    repo_hint = _existing_path(args.repo) if args.repo else Path(args.file).expanduser().resolve().parent
    repo_root = discover_repository(repo_hint)
    if repo_root is None:
        raise SystemExit(f"Not a git repository: {repo_hint}")
    rel_path = _relative_to_repo(args.file, repo_root)
    snapshot = collect_diff(CLI_TAB_ID, repo_root, rel_path, args.staged)
    sys.stdout.write(format_diff(snapshot, word_diff=args.word_diff))


def _run_show(args: argparse.Namespace) -> None:
    path = _existing_path(args.file)
    if path.is_dir():
        raise SystemExit(f"Is a directory: {path}")
    is_dark_theme = load_dark_theme() and not args.light
    load = collect_file_load(CLI_TAB_ID, path, is_dark_theme)
    syntax = None
    if args.color and load.file_content:
        max_lines = args.max_lines or load_syntax_max_lines()
        syntax = collect_file_syntax_highlight(
            CLI_TAB_ID, path, load.file_content, is_dark_theme, load.file_signature, max_lines
        )
    if load.file_preview_notice:
        sys.stderr.write(f"{load.file_preview_notice}\n")
    if syntax is not None and syntax.syntax_highlight_notice:
        sys.stderr.write(f"{syntax.syntax_highlight_notice}\n")
    sys.stdout.write(format_file(load, syntax, color=args.color))


def _log_file_path(value: str | None) -> Path | None:
    if value is None:
        return None
    return Path(value) if value else default_log_file()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repoview",
        description="Inspect git status, directory listings, diffs and file previews.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging on stderr.")
    parser.add_argument("--perf", action="store_true", help="Log collector timings (same as REPOVIEW_PERF=1).")
    parser.add_argument(
        "--log-file",
        nargs="?",
        const="",
        default=None,
        metavar="PATH",
        help="Also write DEBUG logs to PATH, or to the user log directory when PATH is omitted.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    status = subparsers.add_parser("status", help="Show categorized repository status.")
    status.add_argument("path", nargs="?", default=".", help="Repository path. Defaults to current directory.")
    status.set_defaults(handler=_run_status)

    tree = subparsers.add_parser("tree", help="List a directory, directories first.")
    tree.add_argument("path", nargs="?", default=".", help="Directory to list. Defaults to current directory.")
    tree.add_argument("--hidden", action="store_true", help="Include dot-files.")
    tree.set_defaults(handler=_run_tree)

    diff = subparsers.add_parser("diff", help="Show the line and word diff of one file.")
    diff.add_argument("file", help="File path, absolute or relative to the repository root.")
    diff.add_argument("--repo", default=None, help="Repository path. Defaults to the file's directory.")
    diff.add_argument("--staged", action="store_true", help="Diff the index against HEAD.")
    diff.add_argument("--word-diff", action="store_true", help="Mark changed words with [-..-] and {+..+}.")
    diff.set_defaults(handler=_run_diff)

    show = subparsers.add_parser("show", help="Load a file the way the viewer does.")
    show.add_argument("file", help="File to load.")
    show.add_argument("--light", action="store_true", help="Use the light theme for previews.")
    show.add_argument("--color", action="store_true", help="Syntax-highlight text with ANSI colors.")
    show.add_argument(
        "--max-lines",
        type=_positive_int,
        default=None,
        help="Highlight at most this many lines (default: config syntax_max_lines).",
    )
    show.set_defaults(handler=_run_show)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run one collector subcommand."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, log_file=_log_file_path(args.log_file), perf=True if args.perf else None)
    args.handler(args)


if __name__ == "__main__":
    main()
