from click.testing import CliRunner

from marc.build import BuildResult
from marc.cli import cli


def test_cli_builds_site(tmp_path):
    (tmp_path / "a.md").write_text("---\ndate: 2023-01-02\n---\nA", encoding="utf-8")
    (tmp_path / "b.md").write_text("B", encoding="utf-8")
    result = CliRunner().invoke(cli, [str(tmp_path)])
    assert result.exit_code == 0
    assert "Built 2 pages" in result.output
    assert (tmp_path / "a.html").exists()
    assert (tmp_path / "b.html").exists()


def test_cli_requires_exactly_one_site(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, [])
    assert result.exit_code != 0
    assert "Usage" in result.output

    result = runner.invoke(cli, [str(tmp_path), str(tmp_path)])
    assert result.exit_code != 0
    assert "Usage" in result.output


def test_cli_rejects_missing_directory(tmp_path):
    result = CliRunner().invoke(cli, [str(tmp_path / "missing")])
    assert result.exit_code != 0


def test_cli_reports_build_failure(tmp_path):
    (tmp_path / "bad.md").write_text("x", encoding="utf-8")
    (tmp_path / "base.tmpl").write_text("{{ nope.x }}", encoding="utf-8")
    result = CliRunner().invoke(cli, [str(tmp_path)])
    assert result.exit_code == 1
    assert "Build failed:" in result.output
    assert "bad.md" in result.output
    assert not (tmp_path / "bad.html").exists()


def test_cli_passes_config(monkeypatch, tmp_path):
    config_path = tmp_path / "marc.yaml"
    config_path.write_text("layout_file: custom.j2\n", encoding="utf-8")
    seen = {}

    def fake_build_site(site_dir, config=None, converter=None):
        seen["site_dir"] = site_dir
        seen["config"] = config
        return BuildResult(documents=[], site_dir=site_dir, layout_is_default=True)

    monkeypatch.setattr("marc.cli.build_site", fake_build_site)
    result = CliRunner().invoke(
        cli, [str(tmp_path), "--config", str(config_path)], catch_exceptions=False
    )
    assert result.exit_code == 0
    assert seen["site_dir"] == tmp_path
    assert seen["config"]["layout_file"] == "custom.j2"
    assert "Built 0 pages" in result.output


def test_module_main_entrypoint():
    from marc.__main__ import main

    assert callable(main)


def test_main_invokes_cli(monkeypatch):
    import marc.cli as cli_mod

    called = {}

    def fake_cli():
        called["ran"] = True

    monkeypatch.setattr(cli_mod, "cli", fake_cli)
    cli_mod.main()
    assert called["ran"]
