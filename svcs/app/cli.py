"""SVCS command-line interface.

One invocation runs one command:
- Exit 0: Completed, including user errors such as a missing argument
- Exit 1: Fatal error (unreadable or corrupt repository files)
"""

from __future__ import annotations

import argparse
import os
import sys

from .. import __version__
from ..core.controller import VcsController
from ..core.state import SvcsError
from ..utils.env import get_repo_dir, get_work_tree, log_debug


COMMANDS = {
    "config": "Get and set a username.",
    "add": "Add a file to the index.",
    "log": "Show commit logs.",
    "commit": "Save changes.",
    "checkout": "Restore a file.",
}


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svcs",
        description="SVCS - a minimal single-user version control system",
        add_help=False,
    )
    parser.add_argument(
        "--help",
        "-h",
        action="store_true",
        help="Show the list of commands",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    parser.add_argument("command", nargs="?", help="config | add | log | commit | checkout")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Command arguments, taken as written")
    return parser


def print_help() -> None:
    print("These are SVCS commands:")
    for name, description in COMMANDS.items():
        print(f"{name:<10}{description}")


def main(args: list[str] | None = None) -> int:
    parser = create_parser()
    parsed, unknown = parser.parse_known_args(args)

    if parsed.debug:
        os.environ["SVCS_DEBUG"] = "1"

    stray = unknown or ([] if parsed.command else parsed.args)
    if stray:
        print(f"'{stray[0]}' is not a SVCS command.")
        return 0

    if parsed.help or not parsed.command:
        print_help()
        return 0

    if parsed.command not in COMMANDS:
        print(f"'{parsed.command}' is not a SVCS command.")
        return 0

    try:
        work_tree = get_work_tree()
        controller = VcsController(working_dir=work_tree, repo_dir=get_repo_dir(work_tree))
        log_debug(f"Repository: {controller.repo_dir}, command={parsed.command}")

        if parsed.command == "config":
            return cmd_config(parsed, controller)
        if parsed.command == "add":
            return cmd_add(parsed, controller)
        if parsed.command == "log":
            return cmd_log(controller)
        if parsed.command == "commit":
            return cmd_commit(parsed, controller)
        return cmd_checkout(parsed, controller)
    except (SvcsError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_config(args: argparse.Namespace, controller: VcsController) -> int:
    name = " ".join(args.args).strip()
    result = controller.config(name or None)
    if not result.get("success"):
        print("Please, tell me who you are.")
        return 0

    print(f"The username is {result['name']}.")
    return 0


def cmd_add(args: argparse.Namespace, controller: VcsController) -> int:
    path = args.args[0] if args.args else None
    result = controller.add(path)
    if not result.get("success"):
        print(f"Can't find '{result['path']}'.")
        return 0

    if path:
        print(f"The file '{path}' is tracked.")
        return 0

    files = result.get("files") or []
    if not files:
        print("Add a file to the index.")
        return 0

    print("Tracked files:")
    for file in files:
        print(file)
    return 0


def cmd_log(controller: VcsController) -> int:
    commits = controller.log()["commits"]
    if not commits:
        print("No commits yet.")
        return 0

    for commit in commits:
        print(f"commit {commit.hash}")
        print(f"Author: {commit.author}")
        print(commit.message)
        print()
    return 0


def cmd_commit(args: argparse.Namespace, controller: VcsController) -> int:
    message = " ".join(args.args) if args.args else None
    result = controller.commit(message)
    if not result.get("success"):
        if result.get("reason") == "no_message":
            print("Message was not passed.")
        else:
            print("Nothing to commit.")
        return 0

    print("Changes are committed.")
    return 0


def cmd_checkout(args: argparse.Namespace, controller: VcsController) -> int:
    commit_id = args.args[0] if args.args else None
    result = controller.checkout(commit_id)
    if not result.get("success"):
        if result.get("reason") == "no_commit_id":
            print("Commit id was not passed.")
        else:
            print("Commit does not exist.")
        return 0

    print(f"Switched to commit {result['hash']}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
