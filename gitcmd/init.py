"""
init.py

Responsibility: Build the argument list for `git init`.

Rules:
- Every option is optional; an unset option emits no tokens and git applies its own default.
- Tokens are emitted in a fixed order, independent of the order options were set:
  quiet, bare, template, separate-git-dir, initial-branch, object-format, shared, directory.
- The directory is positional and always last.

This module intentionally does NOT spawn processes or validate values beyond their type.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from gitcmd.command import Command

GIT_PROGRAM = "git"


class Hash(str, Enum):
    """Object format (hash algorithm) for a new repository. SHA1 is git's default."""

    SHA1 = "sha1"
    # May be compiled out of the installed git.
    SHA256 = "sha256"


class Shared(str, Enum):
    """
    Named values for `--shared`. Git's default is UMASK.

    Members that git treats as synonyms share a value, which makes them enum aliases:
    `Shared.FALSE is Shared.UMASK`, `Shared.TRUE is Shared.GROUP` and
    `Shared.WORLD is Shared.EVERYBODY is Shared.ALL`.
    """

    UMASK = "umask"
    FALSE = "umask"
    GROUP = "group"
    TRUE = "group"
    ALL = "all"
    WORLD = "all"
    EVERYBODY = "all"


@dataclass(frozen=True)
class Octal:
    """
    Explicit permission bits for `--shared`, e.g. `Octal(0o640)`.

    Overrides the user's umask rather than loosening it. Git expects a mode between
    0o000 and 0o777; anything else is reported by git when the command runs.
    """

    perm: int

    @property
    def value(self) -> str:
        return format(self.perm, "04o")


SharedOption = Shared | Octal


class GitInitBuilder:
    """
    Fluent builder for `git init`. Create one with `Git.init()`.

    Each setter records a single option, overwriting any earlier value, and returns
    the builder so calls can be chained:

        cmd = Git.init().quiet().initial_branch("main").directory(path).make_cmd()
    """

    def __init__(self) -> None:
        self._quiet = False
        self._bare = False
        self._template: str | None = None
        self._initial_branch: str | None = None
        self._separate_git_dir: str | None = None
        self._object_format: Hash | None = None
        self._shared: SharedOption | None = None
        self._directory: str | None = None

    def quiet(self) -> GitInitBuilder:
        """Only print error and warning messages."""
        self._quiet = True
        return self

    def bare(self) -> GitInitBuilder:
        """Create a bare repository."""
        self._bare = True
        return self

    def template(self, path: str | os.PathLike[str]) -> GitInitBuilder:
        """
        Directory whose contents are copied into the new `.git` directory.

        This is a template for `.git` (hooks, info/exclude, ...), not for the work tree.
        """
        self._template = os.fspath(path)
        return self

    def initial_branch(self, name: str) -> GitInitBuilder:
        """Name of the initial branch. Git falls back to its configured default."""
        self._initial_branch = str(name)
        return self

    def separate_git_dir(self, path: str | os.PathLike[str]) -> GitInitBuilder:
        """
        Put the repository at `path` and leave a `.git` file pointing to it.

        On reinitialization the repository is moved to `path`.
        """
        self._separate_git_dir = os.fspath(path)
        return self

    def object_format(self, obj: Hash) -> GitInitBuilder:
        """Hash algorithm for objects. SHA256 fails at run time if git was built without it."""
        self._object_format = obj
        return self

    def shared(self, shared: SharedOption) -> GitInitBuilder:
        """
        Share the repository among several users.

        Git sets `core.sharedRepository` so files under $GIT_DIR get the requested
        permissions. See `Shared` and `Octal` for the accepted values.
        """
        self._shared = shared
        return self

    def directory(self, path: str | os.PathLike[str]) -> GitInitBuilder:
        """Directory to initialize, i.e. `git init <directory>`."""
        self._directory = os.fspath(path)
        return self

    def args(self) -> list[str]:
        """
        Return the subcommand tokens (without the program name) in canonical order.
        """
        args = ["init"]

        if self._quiet:
            args.append("--quiet")
        if self._bare:
            args.append("--bare")
        if self._template is not None:
            args.extend(["--template", self._template])
        if self._separate_git_dir is not None:
            args.extend(["--separate-git-dir", self._separate_git_dir])
        if self._initial_branch is not None:
            args.extend(["--initial-branch", self._initial_branch])
        if self._object_format is not None:
            args.extend(["--object-format", self._object_format.value])
        if self._shared is not None:
            args.append(f"--shared={self._shared.value}")
        # Positional, so it must come after every flag.
        if self._directory is not None:
            args.append(self._directory)

        return args

    def make_cmd(self, program: str = GIT_PROGRAM) -> Command:
        """
        Finish the builder and return a `Command` describing the invocation.

        Nothing runs until `Command.run()` is called, so env vars and the working
        directory can still be added to the returned command.
        """
        return Command(program=program, args=self.args())
