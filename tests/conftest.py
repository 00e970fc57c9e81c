"""テスト共通フィクスチャ。"""

from collections.abc import Callable
from pathlib import Path

import pytest

from convention_checker.config import CheckerConfig
from convention_checker.models.rule import RuleSet
from convention_checker.registry.rules import load_rules
from convention_checker.services.checker import ConventionChecker

ProjectFactory = Callable[[dict[str, str]], Path]

_CLEAN_PROJECT: dict[str, str] = {
    "app/Filament/Admin/Clusters/Finance/Resources/InvoiceResource.php": (
        "<?php\n\nnamespace App\\Filament\\Admin\\Clusters\\Finance\\Resources;\n\n"
        "class InvoiceResource extends Resource\n{\n}\n"
    ),
    "app/Filament/App/Clusters/Sales/Resources/OrderResource.php": (
        "<?php\n\nuse App\\Models\\Order;\nuse Filament\\Facades\\Filament;\n\n"
        "class OrderResource extends Resource\n{\n"
        "    public static function getOptions(): array\n    {\n"
        "        return Order::all()->whereBelongsTo(Filament::getTenant())->pluck('name');\n"
        "    }\n}\n"
    ),
    "app/Filament/Admin/Widgets/RevenueWidget.php": "<?php\n\nclass RevenueWidget extends Widget\n{\n}\n",
    "app/Http/Controllers/Controller.php": (
        "<?php\n\nnamespace App\\Http\\Controllers;\n\nabstract class Controller\n{\n}\n"
    ),
    "app/Http/Controllers/InvoiceController.php": "<?php\n\nclass InvoiceController extends Controller\n{\n}\n",
    "database/migrations/2024_01_01_000000_create_order_items_table.php": (
        "<?php\n\nreturn new class extends Migration\n{\n"
        "    public function up(): void\n    {\n"
        "        Schema::create('order_items', function (Blueprint $table) {\n"
        "            $table->foreignId('order_id')->constrained('orders');\n"
        "        });\n    }\n};\n"
    ),
    "resources/views/order-summary.blade.php": "<div>{{ $order->id }}</div>\n",
    "routes/web.php": (
        "<?php\n\nuse App\\Http\\Controllers\\InvoiceController;\n\n"
        "Route::get('/invoices', [InvoiceController::class, 'index'])->name('invoices.index');\n"
        "Route::middleware('auth')->group(function () {\n"
        "    Route::get('/invoices/{invoice}', [InvoiceController::class, 'show'])->name('invoices.show');\n"
        "});\n"
        "Route::prefix('admin')->name('admin.')->group(function () {\n"
        "    Route::middleware('can:audit')->get('/audit', [InvoiceController::class, 'audit'])->name('audit');\n"
        "});\n"
    ),
}


@pytest.fixture
def config_dir() -> Path:
    """設定ファイルディレクトリ。"""
    return Path(__file__).parent.parent / "config"


@pytest.fixture
def rules(config_dir: Path) -> RuleSet:
    """デフォルトの規約ルール。"""
    return load_rules(config_dir / "rules.yaml")


@pytest.fixture
def checker(rules: RuleSet) -> ConventionChecker:
    """テスト用ConventionChecker。"""
    return ConventionChecker(rules, max_workers=4)


@pytest.fixture
def checker_config(config_dir: Path) -> CheckerConfig:
    """テスト用CheckerConfig。"""
    return CheckerConfig(config_dir=config_dir)


@pytest.fixture
def make_project(tmp_path: Path) -> ProjectFactory:
    """相対パス → 内容の辞書からプロジェクトツリーを作成する。"""

    def _make(files: dict[str, str]) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        for relative_path, content in files.items():
            path = root / relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def clean_project() -> dict[str, str]:
    """規約違反のないプロジェクトのファイル一式。"""
    return dict(_CLEAN_PROJECT)
