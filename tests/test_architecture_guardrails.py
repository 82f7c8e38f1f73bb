from __future__ import annotations

import ast
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "shootbudget"


def _python_files(root: Path):
    for path in root.rglob("*.py"):
        if "dist" in path.parts:
            continue
        yield path


def _imported_modules(path: Path):
    tree = ast.parse(path.read_text(encoding="utf-8", errors="ignore"))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom):
            yield node.module or ""


def test_core_layer_does_not_import_infra_layer():
    violations: list[tuple[str, str]] = []
    for path in _python_files(PACKAGE / "core"):
        for name in _imported_modules(path):
            if name.startswith("shootbudget.infra"):
                violations.append((str(path.relative_to(ROOT)), name))

    assert not violations, f"Core layer imports infra layer: {violations}"


def test_domain_layer_stays_free_of_persistence_and_services():
    violations: list[tuple[str, str]] = []
    for path in _python_files(PACKAGE / "core" / "domain"):
        for name in _imported_modules(path):
            if name.startswith(("sqlalchemy", "shootbudget.core.services", "openpyxl")):
                violations.append((str(path.relative_to(ROOT)), name))

    assert not violations, f"Domain layer has outward imports: {violations}"


def test_no_python_module_exceeds_hard_line_limit():
    offenders = []
    for path in _python_files(PACKAGE):
        lines = len(path.read_text(encoding="utf-8", errors="ignore").splitlines())
        if lines > 1200:
            offenders.append((str(path.relative_to(ROOT)), lines))
    assert not offenders, f"Modules exceed hard 1200-line limit: {offenders}"
