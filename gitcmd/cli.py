"""
cli.py

Responsibility: CLI entrypoint for gitcmd.

High-level flow (single command `init`):
1) Translate CLI flags -> `GitInitBuilder`
2) Finish the builder -> `Command` (plus env / working directory overrides)
3) Print the command, or execute it with `--exec`

When executing, git's stdout, stderr and exit status are passed through unmodified.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from gitcmd import Git, __version__
from gitcmd.command import Command, CommandError
from gitcmd.init import GIT_PROGRAM, Hash, Octal, Shared, SharedOption

logger = logging.getLogger(__name__)

GIT_PROGRAM_ENV = "GITCMD_GIT"


class CLIError(RuntimeError):
    pass


def _parse_shared(text: str) -> SharedOption:
    """
    Accept a named `--shared` value (umask, false, group, true, all, world, everybody)
    or an octal mode such as 0640.
    """
    value = text.strip()
    try:
        return Shared[value.upper()]
    except KeyError:
        pass
    try:
        return Octal(int(value, 8))
    except ValueError:
        names = ", ".join(Shared.__members__).lower()
        raise argparse.ArgumentTypeError(f"expected one of {names} or an octal mode, got {text!r}") from None


def _parse_env(text: str) -> tuple[str, str]:
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {text!r}")
    return key, value


def _build_command(args: argparse.Namespace) -> Command:
    builder = Git.init()
    if args.quiet:
        builder.quiet()
    if args.bare:
        builder.bare()
    if args.template is not None:
        builder.template(args.template)
    if args.separate_git_dir is not None:
        builder.separate_git_dir(args.separate_git_dir)
    if args.initial_branch is not None:
        builder.initial_branch(args.initial_branch)
    if args.object_format is not None:
        builder.object_format(Hash(args.object_format))
    if args.shared is not None:
        builder.shared(args.shared)
    if args.directory is not None:
        builder.directory(args.directory)

    # CLI flag, then environment, then default.
    program = args.git or os.environ.get(GIT_PROGRAM_ENV) or GIT_PROGRAM
    cmd = builder.make_cmd(program)
    if args.cwd is not None:
        cmd.set_cwd(args.cwd)
    cmd.update_env(dict(args.env))
    return cmd


def init_cmd(args: argparse.Namespace) -> int:
    cmd = _build_command(args)

    if args.json:
        print(json.dumps(cmd.to_dict(), indent=2))
        return 0
    if not args.exec:
        print(cmd)
        return 0

    try:
        result = cmd.run()
    except CommandError as e:
        raise CLIError(e.stderr or str(e)) from e

    sys.stdout.write(result.stdout)
    sys.stderr.write(result.stderr)
    return result.returncode


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="gitcmd", description="gitcmd - typed git command builder")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    sub = p.add_subparsers(dest="command", required=True)

    i = sub.add_parser("init", help="Build (and optionally run) a `git init` command")
    i.add_argument("directory", nargs="?", default=None, help="Directory to initialize")
    i.add_argument("-q", "--quiet", action="store_true", help="Only print error and warning messages")
    i.add_argument("--bare", action="store_true", help="Create a bare repository")
    i.add_argument("--template", default=None, help="Directory whose contents are copied into .git")
    i.add_argument("--separate-git-dir", default=None, help="Store the repository outside the work tree")
    i.add_argument("-b", "--initial-branch", default=None, help="Name of the initial branch")
    i.add_argument(
        "--object-format",
        choices=[h.value for h in Hash],
        default=None,
        help="Hash algorithm for objects",
    )
    i.add_argument(
        "--shared",
        type=_parse_shared,
        default=None,
        help="Share the repository: umask|false|group|true|all|world|everybody or an octal mode like 0640",
    )

    output = i.add_mutually_exclusive_group()
    output.add_argument("--exec", action="store_true", help="Run the command instead of printing it")
    output.add_argument("--json", action="store_true", help="Print the command as JSON instead of running it")
    i.add_argument("-C", dest="cwd", default=None, help="Working directory for the command")
    i.add_argument(
        "--env",
        type=_parse_env,
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra environment variable for the command (repeatable)",
    )
    i.add_argument("--git", default=None, help=f"git executable (or set env {GIT_PROGRAM_ENV})")

    i.set_defaults(func=init_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )
    try:
        return int(args.func(args))
    except CLIError as e:
        logger.debug("command failed", exc_info=True)
        print(f"gitcmd: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
