from __future__ import annotations

import ast
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

# Layering:
#   huffkit.errors  (leaf, imports nothing from huffkit)
#   huffkit.core.*  (algorithms; may import only huffkit.core.* and huffkit.errors)
#   everything else (api, codes_spec, report, baselines, cli) sits on top.
PACKAGE_ROOT = "huffkit"
CORE_PREFIX = "huffkit.core"
CORE_ALLOWED: tuple[str, ...] = (CORE_PREFIX, "huffkit.errors")


@dataclass(frozen=True)
class ImportEdge:
    src: str
    dst: str
    file: Path
    lineno: int


def _under(mod: str, prefix: str) -> bool:
    return mod == prefix or mod.startswith(prefix + ".")


def _module_name(src_dir: Path, py_file: Path) -> str | None:
    parts = list(py_file.relative_to(src_dir).parts)
    if not parts or parts[0] != PACKAGE_ROOT:
        return None
    if py_file.name == "__init__.py":
        parts = parts[:-1]
    else:
        parts[-1] = py_file.stem
    return ".".join(parts) or None


def _absolute(current_mod: str, level: int, module: str | None) -> str | None:
    if level <= 0:
        return module
    pkg = current_mod.split(".")[:-1]
    if level > len(pkg) + 1:
        return None
    pkg = pkg[: len(pkg) - level + 1]
    return ".".join(pkg + module.split(".")) if module else ".".join(pkg)


def _iter_edges(src_dir: Path) -> Iterable[ImportEdge]:
    for py in sorted(src_dir.rglob("*.py")):
        mod = _module_name(src_dir, py)
        if not mod:
            continue
        tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))
        for node in ast.walk(tree):
            targets: list[str] = []
            if isinstance(node, ast.Import):
                targets = [a.name for a in node.names]
            elif isinstance(node, ast.ImportFrom):
                dst = _absolute(mod, node.level, node.module)
                targets = [dst] if dst else []
            for dst in targets:
                if _under(dst, PACKAGE_ROOT):
                    yield ImportEdge(src=mod, dst=dst, file=py, lineno=getattr(node, "lineno", 0))


def _src_dir() -> Path:
    src_dir = Path(__file__).resolve().parents[1] / "src"
    if not src_dir.is_dir():
        raise AssertionError(f"Expected src/ directory at: {src_dir}")
    return src_dir


def test_core_never_imports_upper_layers() -> None:
    """huffkit.core must stay a pure algorithm layer: no CLI, report, JSON or baselines."""
    violations = [
        e
        for e in _iter_edges(_src_dir())
        if _under(e.src, CORE_PREFIX) and not any(_under(e.dst, a) for a in CORE_ALLOWED)
    ]
    if violations:
        lines = ["Forbidden imports detected (core -> upper layer):"]
        for v in violations:
            lines.append(f"  {v.file}:{v.lineno}  {v.src}  ->  {v.dst}")
        lines.append("")
        lines.append("Fix: move presentation/IO logic out of huffkit.core, or invert the dependency.")
        raise AssertionError("\n".join(lines))


def test_errors_module_is_a_leaf() -> None:
    edges = [e for e in _iter_edges(_src_dir()) if e.src == "huffkit.errors"]
    assert edges == []


def test_resolve_relative_imports() -> None:
    assert _absolute("huffkit.core.tree", 1, "freq") == "huffkit.core.freq"
    assert _absolute("huffkit.core.tree", 2, "errors") == "huffkit.errors"
    assert _absolute("huffkit.cli", 0, "huffkit.api") == "huffkit.api"
