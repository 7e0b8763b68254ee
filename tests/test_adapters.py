"""
Tests for the shell runner and the pacman, git and makepkg adapters.
"""

import subprocess
from pathlib import Path

from hone.adapters.git import GitFetcher
from hone.adapters.makepkg import MakepkgBuilder
from hone.adapters.pacman import PacmanAdapter, parse_package_list
from hone.adapters.shell.command import run_command
from hone.core.models.receipt import Receipt


class RecordingRunner:
    """Runner stand-in returning canned receipts and logging every call."""

    def __init__(self, receipt: Receipt | None = None) -> None:
        self.receipt = receipt
        self.calls: list[dict] = []

    def __call__(self, args, *, cwd=None, interactive=False) -> Receipt:
        self.calls.append({"args": args, "cwd": cwd, "interactive": interactive})
        return self.receipt or Receipt.success(command=args)


# ── Shell runner ─────────────────────────────────────────────────────


class TestRunCommand:
    def test_success(self, monkeypatch):
        def fake_run(args, **kwargs):
            return subprocess.CompletedProcess(args, 0, stdout="yay 12.3.5-1\n", stderr="")

        monkeypatch.setattr(subprocess, "run", fake_run)
        receipt = run_command(["pacman", "-Q", "yay"])
        assert receipt.ok
        assert receipt.output == "yay 12.3.5-1"
        assert receipt.return_code == 0

    def test_nonzero_exit(self, monkeypatch):
        def fake_run(args, **kwargs):
            return subprocess.CompletedProcess(args, 1, stdout="", stderr="error: package 'x' was not found")

        monkeypatch.setattr(subprocess, "run", fake_run)
        receipt = run_command(["pacman", "-Q", "x"])
        assert receipt.failed
        assert receipt.return_code == 1
        assert "was not found" in receipt.error

    def test_spawn_failure_is_a_failed_receipt(self, monkeypatch):
        def fake_run(args, **kwargs):
            raise FileNotFoundError(2, "No such file or directory", args[0])

        monkeypatch.setattr(subprocess, "run", fake_run)
        receipt = run_command(["definitely-not-pacman", "-Q"])
        assert receipt.failed
        assert receipt.metadata["spawn_failed"] is True

    def test_cwd_and_interactive_passed_through(self, monkeypatch, tmp_path: Path):
        seen = {}

        def fake_run(args, **kwargs):
            seen.update(kwargs)
            return subprocess.CompletedProcess(args, 0, stdout=None, stderr=None)

        monkeypatch.setattr(subprocess, "run", fake_run)
        receipt = run_command(["makepkg", "-risc"], cwd=tmp_path, interactive=True)
        assert receipt.ok
        assert seen["cwd"] == str(tmp_path)
        assert seen["capture_output"] is False

    def test_real_command(self, tmp_path: Path):
        receipt = run_command(["sh", "-c", "pwd"], cwd=tmp_path)
        assert receipt.ok
        assert Path(receipt.output).resolve() == tmp_path.resolve()


# ── Pacman ───────────────────────────────────────────────────────────


class TestParsePackageList:
    def test_skips_malformed_lines(self):
        output = "yay 12.3.5-1\nbroken\n\nparu 2.0.4-1 extra\nspotify 1:1.2.31-1\n"
        pkgs = parse_package_list(output)
        assert [(p.name, p.version) for p in pkgs] == [
            ("yay", "12.3.5-1"),
            ("spotify", "1:1.2.31-1"),
        ]


class TestPacmanAdapter:
    def test_is_installed(self):
        runner = RecordingRunner(Receipt.success(command=[], output="yay 12.3.5-1"))
        assert PacmanAdapter(runner=runner).is_installed("yay")
        assert runner.calls[0]["args"] == ["pacman", "-Q", "yay"]

    def test_not_installed(self):
        runner = RecordingRunner(Receipt.failure(command=[], error="not found", return_code=1))
        assert not PacmanAdapter(runner=runner).is_installed("nope")

    def test_spawn_failure_means_not_installed(self):
        runner = RecordingRunner(
            Receipt.failure(command=[], error="no pacman", metadata={"spawn_failed": True})
        )
        assert PacmanAdapter(runner=runner).is_installed("yay") is False

    def test_list_foreign(self):
        runner = RecordingRunner(Receipt.success(command=[], output="yay 12.3.5-1\nparu 2.0.4-1"))
        pkgs = PacmanAdapter(runner=runner).list_foreign_installed()
        assert [p.name for p in pkgs] == ["yay", "paru"]
        assert runner.calls[0]["args"] == ["pacman", "-Qm"]

    def test_list_foreign_none_installed(self):
        runner = RecordingRunner(Receipt.failure(command=[], error="exit 1", return_code=1))
        assert PacmanAdapter(runner=runner).list_foreign_installed() == []

    def test_list_foreign_spawn_failure(self):
        runner = RecordingRunner(
            Receipt.failure(command=[], error="no pacman", metadata={"spawn_failed": True})
        )
        assert PacmanAdapter(runner=runner).list_foreign_installed() == []

    def test_system_upgrade_is_interactive_sudo(self):
        runner = RecordingRunner()
        PacmanAdapter(runner=runner).system_upgrade()
        assert runner.calls[0]["args"] == ["sudo", "pacman", "-Syu"]
        assert runner.calls[0]["interactive"] is True

    def test_remove(self):
        runner = RecordingRunner()
        assert PacmanAdapter(runner=runner).remove("yay").ok
        assert runner.calls[0]["args"] == ["sudo", "pacman", "-Rns", "yay"]


# ── Git / makepkg ────────────────────────────────────────────────────


class TestGitFetcher:
    def test_clone_command(self, tmp_path: Path):
        runner = RecordingRunner()
        dest = tmp_path / "cache" / "yay"
        GitFetcher(runner=runner).clone("https://aur.archlinux.org/yay.git", dest)
        call = runner.calls[0]
        assert call["args"] == ["git", "clone", "https://aur.archlinux.org/yay.git", str(dest)]
        assert call["cwd"] == dest.parent
        assert dest.parent.is_dir()


class TestMakepkgBuilder:
    def test_runs_in_workspace(self, tmp_path: Path):
        runner = RecordingRunner()
        receipt = MakepkgBuilder(runner=runner).build_and_install(tmp_path)
        assert receipt.ok
        assert runner.calls[0]["args"] == ["makepkg", "-risc"]
        assert runner.calls[0]["cwd"] == tmp_path

    def test_custom_flags(self, tmp_path: Path):
        runner = RecordingRunner()
        MakepkgBuilder(flags=["-si", "--noconfirm"], runner=runner).build_and_install(tmp_path)
        assert runner.calls[0]["args"] == ["makepkg", "-si", "--noconfirm"]

    def test_missing_workspace(self, tmp_path: Path):
        runner = RecordingRunner()
        receipt = MakepkgBuilder(runner=runner).build_and_install(tmp_path / "gone")
        assert receipt.failed
        assert "does not exist" in receipt.error
        assert runner.calls == []
