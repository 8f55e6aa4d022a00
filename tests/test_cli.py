"""
Tests for the memdrive command-line interface.
"""

from typer.testing import CliRunner

from memdrive.cli import app

runner = CliRunner()


class TestDemoCommand:
    """Test the demo listing."""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("demo", "tree", "shell"):
            assert command in result.output

    def test_demo_lists_seed(self):
        result = runner.invoke(app, ["demo"])
        assert result.exit_code == 0
        for name in ("Documents/", "Welcome.txt", "cat-photo.jpg", "ocean-waves.mp4"):
            assert name in result.output

    def test_demo_sorted_by_size(self):
        result = runner.invoke(app, ["demo", "--sort", "size", "--order", "desc"])
        assert result.exit_code == 0
        output = result.output
        assert output.index("ocean-waves.mp4") < output.index("cat-photo.jpg") < output.index("Welcome.txt")

    def test_demo_rejects_unknown_sort(self):
        result = runner.invoke(app, ["demo", "--sort", "date"])
        assert result.exit_code != 0

    def test_demo_from_config_file(self, tmp_path):
        path = tmp_path / "memdrive.toml"
        path.write_text('[drive]\nroot_name = "Vault"\nseed_demo = false\n')
        result = runner.invoke(app, ["demo", "--config", str(path)])
        assert result.exit_code == 0
        assert "Vault" in result.output
        assert "Welcome.txt" not in result.output


class TestTreeCommand:
    """Test the tree view."""

    def test_tree(self):
        result = runner.invoke(app, ["tree"])
        assert result.exit_code == 0
        assert "Home/" in result.output
        assert "Documents/" in result.output
        assert "2 folders, 3 files" in result.output


class TestShellCommand:
    """Test the interactive shell loop."""

    def test_shell_session(self):
        result = runner.invoke(app, ["shell"], input="mkdir Reports\nls\nexit\n")
        assert result.exit_code == 0
        assert "created folder Reports" in result.output
        assert "Reports/" in result.output

    def test_shell_reports_errors_and_ends_on_eof(self):
        result = runner.invoke(app, ["shell"], input="cd missing\n")
        assert result.exit_code == 0
        assert "error: Item not found: missing" in result.output

    def test_shell_uses_env(self, monkeypatch):
        monkeypatch.setenv("MEMDRIVE_SEED_DEMO", "false")
        result = runner.invoke(app, ["shell"], input="ls\nquit\n")
        assert result.exit_code == 0
        assert "(empty)" in result.output
