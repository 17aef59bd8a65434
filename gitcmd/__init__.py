"""
gitcmd package

Typed builders for git command lines. Build a command, get back an inert `Command`,
then run it as is or add env vars / a working directory first:

    from gitcmd import Git

    result = Git.init().initial_branch("main").directory("repo").make_cmd().run()
    if result.returncode == 0:
        print("Initialized a new repo")

Modules:
- `init.py`: `git init` builder and its option types (`Hash`, `Shared`, `Octal`)
- `command.py`: the `Command` invocation descriptor and process hand-off
- `cli.py`: CLI entrypoint (build -> print or execute)
"""

from __future__ import annotations

from gitcmd.command import Command, CommandError
from gitcmd.init import GitInitBuilder, Hash, Octal, Shared, SharedOption

__all__ = [
    "Command",
    "CommandError",
    "Git",
    "GitInitBuilder",
    "Hash",
    "Octal",
    "Shared",
    "SharedOption",
    "__version__",
]

__version__ = "0.1.0"


class Git:
    """Entry point to every supported git subcommand."""

    @staticmethod
    def init() -> GitInitBuilder:
        """Create a builder for `git init`."""
        return GitInitBuilder()
