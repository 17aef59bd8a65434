"""Tests for the `git init` builder."""

from __future__ import annotations

import itertools
import random
from pathlib import Path

import pytest

from gitcmd import Command, Git, GitInitBuilder, Hash, Octal, Shared, SharedOption

# (setter, expected tokens) in canonical emission order.
OPTIONS: list[tuple[str, object, list[str]]] = [
    ("quiet", None, ["--quiet"]),
    ("bare", None, ["--bare"]),
    ("template", "/opt/git-template", ["--template", "/opt/git-template"]),
    ("separate_git_dir", "/srv/repo.git", ["--separate-git-dir", "/srv/repo.git"]),
    ("initial_branch", "main", ["--initial-branch", "main"]),
    ("object_format", Hash.SHA256, ["--object-format", "sha256"]),
    ("shared", Shared.GROUP, ["--shared=group"]),
    ("directory", "/tmp/repo", ["/tmp/repo"]),
]


def _apply(builder: GitInitBuilder, name: str, value: object) -> GitInitBuilder:
    method = getattr(builder, name)
    return method() if value is None else method(value)


def test_entry_point_returns_fresh_builder() -> None:
    a = Git.init()
    b = Git.init()
    assert isinstance(a, GitInitBuilder)
    assert a is not b
    a.quiet()
    assert b.args() == ["init"]


def test_empty_builder() -> None:
    cmd = Git.init().make_cmd()
    assert isinstance(cmd, Command)
    assert cmd.program == "git"
    assert cmd.args == ["init"]
    assert cmd.argv == ["git", "init"]


def test_directory_only() -> None:
    assert Git.init().directory("/tmp/repo").make_cmd().args == ["init", "/tmp/repo"]


def test_quiet_bare_directory() -> None:
    args = Git.init().directory("/tmp/repo").bare().quiet().make_cmd().args
    assert args == ["init", "--quiet", "--bare", "/tmp/repo"]


def test_object_format_pair() -> None:
    args = Git.init().object_format(Hash.SHA256).args()
    i = args.index("--object-format")
    assert args[i : i + 2] == ["--object-format", "sha256"]
    assert Git.init().object_format(Hash.SHA1).args() == ["init", "--object-format", "sha1"]


def test_shared_octal_single_token() -> None:
    args = Git.init().shared(Octal(0o640)).args()
    assert args == ["init", "--shared=0640"]


@pytest.mark.parametrize(
    ("perm", "token"),
    [(511, "--shared=0777"), (416, "--shared=0640"), (0o660, "--shared=0660"), (0, "--shared=0000")],
)
def test_octal_formatting(perm: int, token: str) -> None:
    assert Git.init().shared(Octal(perm)).args()[-1] == token


@pytest.mark.parametrize(
    ("members", "token"),
    [
        ([Shared.UMASK, Shared.FALSE], "--shared=umask"),
        ([Shared.GROUP, Shared.TRUE], "--shared=group"),
        ([Shared.ALL, Shared.WORLD, Shared.EVERYBODY], "--shared=all"),
    ],
)
def test_shared_aliases_render_identically(members: list[Shared], token: str) -> None:
    tokens = {Git.init().shared(m).args()[-1] for m in members}
    assert tokens == {token}


def test_shared_option_covers_both_kinds() -> None:
    assert isinstance(Shared.GROUP, SharedOption)
    assert isinstance(Octal(0o640), SharedOption)


def test_shared_aliases_are_enum_aliases() -> None:
    assert Shared.FALSE is Shared.UMASK
    assert Shared.TRUE is Shared.GROUP
    assert Shared.WORLD is Shared.ALL
    assert Shared.EVERYBODY is Shared.ALL
    assert len(list(Shared)) == 3


def test_paths_accept_pathlike() -> None:
    args = (
        Git.init()
        .template(Path("/opt/tpl"))
        .separate_git_dir(Path("/srv/x.git"))
        .directory(Path("/tmp/repo"))
        .args()
    )
    assert args == ["init", "--template", "/opt/tpl", "--separate-git-dir", "/srv/x.git", "/tmp/repo"]
    assert all(isinstance(a, str) for a in args)


def test_last_value_wins() -> None:
    args = (
        Git.init()
        .initial_branch("master")
        .initial_branch("main")
        .shared(Shared.ALL)
        .shared(Octal(0o600))
        .object_format(Hash.SHA256)
        .object_format(Hash.SHA1)
        .directory("/a")
        .directory("/b")
        .quiet()
        .quiet()
        .args()
    )
    assert args == ["init", "--quiet", "--initial-branch", "main", "--object-format", "sha1", "--shared=0600", "/b"]


def test_unset_fields_emit_nothing() -> None:
    args = Git.init().directory("/tmp/repo").args()
    for flag in ("--quiet", "--bare", "--template", "--separate-git-dir", "--initial-branch", "--object-format"):
        assert flag not in args
    assert not any(a.startswith("--shared") for a in args)


def test_order_is_independent_of_call_order() -> None:
    rng = random.Random(1234)
    for size in range(len(OPTIONS) + 1):
        for subset in itertools.combinations(OPTIONS, size):
            expected = ["init"] + [tok for _name, _value, tokens in subset for tok in tokens]
            for _ in range(3):
                calls = list(subset)
                rng.shuffle(calls)
                builder = Git.init()
                for name, value, _tokens in calls:
                    _apply(builder, name, value)
                assert builder.args() == expected


def test_directory_is_always_last() -> None:
    for size in range(len(OPTIONS)):
        for subset in itertools.combinations(OPTIONS[:-1], size):
            builder = Git.init().directory("/tmp/repo")
            for name, value, _tokens in subset:
                _apply(builder, name, value)
            assert builder.args()[-1] == "/tmp/repo"


def test_builder_copies_values() -> None:
    name = ["m", "a", "i", "n"]
    builder = Git.init().initial_branch("".join(name))
    name.append("x")
    assert builder.args() == ["init", "--initial-branch", "main"]


def test_make_cmd_program_override() -> None:
    cmd = Git.init().quiet().make_cmd("/usr/local/bin/git")
    assert cmd.argv == ["/usr/local/bin/git", "init", "--quiet"]


def test_make_cmd_returns_independent_args() -> None:
    builder = Git.init().bare()
    cmd = builder.make_cmd()
    cmd.arg("extra")
    assert builder.args() == ["init", "--bare"]
