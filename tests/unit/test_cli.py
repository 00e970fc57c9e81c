"""lint-conventions CLIのユニットテスト。"""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from convention_checker.cli import EXIT_BLOCKED, EXIT_INTERNAL_ERROR, EXIT_PASS, app

ProjectFactory = Callable[[dict[str, str]], Path]

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, config_dir: Path) -> None:
    # 実行環境の設定が混ざらないようにする
    monkeypatch.delenv("CONVENTION_CHECKER_RULES_PATH", raising=False)
    monkeypatch.setenv("CONVENTION_CHECKER_CONFIG_DIR", str(config_dir))


class TestLintCommand:
    def test_clean_project_exits_zero(self, make_project: ProjectFactory, clean_project: dict[str, str]) -> None:
        root = make_project(clean_project)
        result = runner.invoke(app, [str(root)])
        assert result.exit_code == EXIT_PASS
        assert "[block]" not in result.stdout
        assert "[warn]" not in result.stdout

    def test_closure_route_text_output(self, make_project: ProjectFactory) -> None:
        root = make_project({"routes/web.php": "<?php\n\nRoute::get('/x', function () { return 1; });\n"})
        result = runner.invoke(app, [str(root), "--format", "text"])
        assert result.exit_code == EXIT_BLOCKED
        assert "routes/web.php:3: [block] closure-in-routes: Logic in Routes" in result.stdout

    def test_json_output(self, make_project: ProjectFactory) -> None:
        root = make_project({"app/Filament/App/Resources/OrderResource.php": "<?php\n"})
        result = runner.invoke(app, [str(root), "--format=json"])
        assert result.exit_code == EXIT_BLOCKED
        data = json.loads(result.stdout)
        assert data["pass"] is False
        assert data["violations"] == [
            {
                "path": "app/Filament/App/Resources/OrderResource.php",
                "line": None,
                "severity": "block",
                "ruleId": "flat-resource",
                "message": "Flat Filament Resource: resources must live under Clusters/<Domain>/Resources/",
            }
        ]

    def test_json_output_is_byte_identical(self, make_project: ProjectFactory, clean_project: dict[str, str]) -> None:
        clean_project["routes/api.php"] = "<?php\nRoute::get('/a', fn () => 1); Route::get('/b', fn () => 2);\n"
        root = make_project(clean_project)
        first = runner.invoke(app, [str(root), "--format", "json"])
        second = runner.invoke(app, [str(root), "--format", "json"])
        assert first.exit_code == EXIT_BLOCKED
        assert first.stdout == second.stdout

    def test_warnings_do_not_fail(self, make_project: ProjectFactory) -> None:
        root = make_project({"resources/views/OrderList.blade.php": "<div></div>"})
        result = runner.invoke(app, [str(root)])
        assert result.exit_code == EXIT_PASS
        assert "[warn] view-naming" in result.stdout

    def test_disable_rule(self, make_project: ProjectFactory) -> None:
        root = make_project({"app/Filament/App/Resources/OrderResource.php": "<?php\n"})
        result = runner.invoke(app, [str(root), "--disable", "flat-resource"])
        assert result.exit_code == EXIT_PASS

    def test_fail_fast(self, make_project: ProjectFactory) -> None:
        files = {f"app/Filament/Admin/Resources/Item{i}Resource.php": "<?php\n" for i in range(5)}
        root = make_project(files)
        result = runner.invoke(app, [str(root), "--fail-fast", "--format", "json"])
        assert result.exit_code == EXIT_BLOCKED
        assert len(json.loads(result.stdout)["violations"]) >= 1

    def test_missing_root_is_internal_error(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(tmp_path / "missing")])
        assert result.exit_code == EXIT_INTERNAL_ERROR

    def test_malformed_rules_is_internal_error(self, make_project: ProjectFactory, tmp_path: Path) -> None:
        root = make_project({"routes/web.php": "<?php\n"})
        bad_rules = tmp_path / "bad.yaml"
        bad_rules.write_text("rules:\n  - id: x\n    category: naming\n", encoding="utf-8")
        result = runner.invoke(app, [str(root), "--rules", str(bad_rules)])
        assert result.exit_code == EXIT_INTERNAL_ERROR

    def test_unknown_format_is_internal_error(self, make_project: ProjectFactory) -> None:
        root = make_project({"routes/web.php": "<?php\n"})
        result = runner.invoke(app, [str(root), "--format", "xml"])
        assert result.exit_code == EXIT_INTERNAL_ERROR

    def test_unknown_log_level_is_internal_error(self, make_project: ProjectFactory) -> None:
        root = make_project({"routes/web.php": "<?php\n"})
        result = runner.invoke(app, [str(root), "--log-level", "verbose"])
        assert result.exit_code == EXIT_INTERNAL_ERROR

    def test_invalid_env_setting_is_internal_error(
        self, make_project: ProjectFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        root = make_project({"routes/web.php": "<?php\n"})
        monkeypatch.setenv("CONVENTION_CHECKER_MAX_WORKERS", "0")
        result = runner.invoke(app, [str(root)])
        assert result.exit_code == EXIT_INTERNAL_ERROR

    def test_chained_closure_route_blocks(self, make_project: ProjectFactory) -> None:
        root = make_project(
            {"routes/web.php": "<?php\nRoute::middleware('auth')->get('/x', function () { return 1; });\n"}
        )
        result = runner.invoke(app, [str(root)])
        assert result.exit_code == EXIT_BLOCKED
        assert "routes/web.php:2: [block] closure-in-routes" in result.stdout
