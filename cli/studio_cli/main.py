"""Main entry point for Studio CLI."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from engine.kernel.errors import StudioError
from studio_cli import __version__, commands
from studio_cli.auth import login, logout
from studio_cli.client import ApiClient
from studio_cli.config import Config

HELP = f"""
Studio CLI v{__version__}

Usage:
  studio [options] <command> [args]

Commands:
  login [USERNAME]              Sign in (prompts for the password)
  logout                        Forget the session (--all for every environment)
  projects                      List projects
  new-project NAME              Create a project (--template nextjs|vite-vue|static)
  tree PROJECT                  Show the file tree
  cat PROJECT PATH              Print a file
  push PROJECT PATH LOCAL_FILE  Save a local file's content to PATH
  add PROJECT PATH              Create an empty file (--folder for a folder)
  rm PROJECT PATH               Delete a file or a folder and its contents
  preview PROJECT               Print the composed preview (--out FILE, --device D)
  entries PROJECT               Show which files feed the preview
  watch PROJECT --out FILE      Rewrite FILE whenever the preview changes

Options:
  --api-url URL       Override API endpoint (default: http://localhost:8000)
  --template NAME     Template for new-project
  --folder            add creates a folder
  --out FILE          Write output to FILE instead of stdout
  --device NAME       preview: wrap in the sandbox host at mobile|tablet|desktop width
  --data-uri          preview: print a data: URL that opens the page in a browser
  --debounce-ms N     watch: delay between a change and the re-render (default 100)
  --all               logout of every environment
  --debug             Verbose logging
  -h, --help          Show this help
  -v, --version       Show version

Environment:
  STUDIO_API_URL      Override API endpoint (same as --api-url)
  STUDIO_SESSION      Use this session token instead of the stored one
"""

_VALUE_OPTIONS = {
    "--api-url": "api_url",
    "--template": "template",
    "--out": "out",
    "--device": "device",
    "--debounce-ms": "debounce_ms",
}
_FLAG_OPTIONS = {
    "--folder": "folder",
    "--data-uri": "data_uri",
    "--all": "logout_all",
    "--debug": "debug",
    "--help": "show_help",
    "-h": "show_help",
    "--version": "show_version",
    "-v": "show_version",
}


class UsageError(Exception):
    """Bad command line."""


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with the command, its positional args and every option.
    """
    result: dict = {
        "command": None,
        "args": [],
        "api_url": None,
        "template": "static",
        "out": None,
        "device": None,
        "debounce_ms": "100",
        "folder": False,
        "data_uri": False,
        "logout_all": False,
        "debug": False,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in _VALUE_OPTIONS:
            if i + 1 >= len(args):
                raise UsageError(f"{arg} requires a value")
            result[_VALUE_OPTIONS[arg]] = args[i + 1]
            i += 1
        elif arg in _FLAG_OPTIONS:
            result[_FLAG_OPTIONS[arg]] = True
        elif arg.startswith("-"):
            raise UsageError(f"Unknown option: {arg}")
        elif result["command"] is None:
            result["command"] = arg
        else:
            result["args"].append(arg)
        i += 1

    try:
        result["debounce_ms"] = int(result["debounce_ms"])
    except ValueError as e:
        raise UsageError("--debounce-ms must be an integer") from e

    return result


_ARITY = {
    "projects": 0,
    "new-project": 1,
    "tree": 1,
    "cat": 2,
    "push": 3,
    "add": 2,
    "rm": 2,
    "preview": 1,
    "entries": 1,
    "watch": 1,
}


def _emit(text: str, out: str | None) -> None:
    if out:
        Path(out).write_text(text, encoding="utf-8")
        print(f"Wrote {out}")
    else:
        print(text)


async def run(opts: dict, config: Config) -> int:
    """Run one project command. Returns the process exit code."""
    command = opts["command"]
    args = opts["args"]
    if command not in _ARITY:
        raise UsageError(f"Unknown command: {command}")
    if len(args) != _ARITY[command]:
        raise UsageError(f"{command} takes {_ARITY[command]} argument(s)")
    if not config.is_authenticated:
        print(f"Not signed in to {config.api_url}")
        print("Run 'studio login' first.")
        return 1

    async with ApiClient(config.api_url, config.session) as client:
        if command == "projects":
            for line in await commands.list_projects(client):
                print(line)
        elif command == "new-project":
            project = await commands.create_project(client, args[0], opts["template"])
            print(f"Created {project['name']} ({project['id']})")
        elif command == "tree":
            print(await commands.show_tree(client, args[0]))
        elif command == "cat":
            _emit(await commands.read_file(client, args[0], args[1]), opts["out"])
        elif command == "push":
            content = Path(args[2]).read_text(encoding="utf-8")
            saved = await commands.push_file(client, args[0], args[1], content)
            print(f"Saved {args[1]}" if saved else f"{args[1]} is already up to date")
        elif command == "add":
            path = await commands.add_file(client, args[0], args[1], is_folder=opts["folder"])
            print(f"Created {path}")
        elif command == "rm":
            await commands.remove_file(client, args[0], args[1])
            print(f"Deleted {args[1]}")
        elif command == "preview":
            document = await commands.render_preview(client, args[0], opts["device"], data_uri=opts["data_uri"])
            _emit(document, opts["out"])
        elif command == "entries":
            for line in await commands.preview_entries(client, args[0]):
                print(line)
        elif command == "watch":
            if not opts["out"]:
                raise UsageError("watch requires --out FILE")
            print(f"Watching project {args[0]}, Ctrl-C to stop")
            await commands.watch_preview(client, args[0], Path(opts["out"]), debounce_ms=opts["debounce_ms"])
    return 0


def main():
    """Main entry point."""
    try:
        opts = parse_args(sys.argv[1:])
    except UsageError as e:
        print(f"Error: {e}")
        print("Run 'studio --help' for usage.")
        sys.exit(2)

    if opts["show_help"] or (opts["command"] is None and not opts["show_version"]):
        print(HELP)
        return
    if opts["show_version"]:
        print(f"studio-cli {__version__}")
        return

    logging.basicConfig(
        level=logging.DEBUG if opts["debug"] else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = Config(api_url_override=opts["api_url"])

    if opts["command"] == "login":
        username = opts["args"][0] if opts["args"] else None
        sys.exit(0 if asyncio.run(login(config, username)) else 1)
    if opts["command"] == "logout":
        sys.exit(0 if asyncio.run(logout(config, logout_all=opts["logout_all"])) else 1)

    try:
        code = asyncio.run(run(opts, config))
    except UsageError as e:
        print(f"Error: {e}")
        print("Run 'studio --help' for usage.")
        code = 2
    except (StudioError, OSError) as e:
        print(f"Error: {e}")
        code = 1
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
