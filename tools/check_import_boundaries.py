"""Static guard for the package's layering and operator purity."""

from __future__ import annotations

import argparse
import ast
from pathlib import Path
from typing import Iterator, NamedTuple

PACKAGE = "itinerary_engine"

# Layers each layer may depend on besides itself.
ALLOWED_DEPENDENCIES: dict[str, frozenset[str]] = {
    "shared": frozenset(),
    "domain": frozenset({"shared", "tools"}),
    "tools": frozenset({"domain", "shared"}),
    "config": frozenset({"domain", "shared"}),
    "infrastructure": frozenset({"config", "shared"}),
    "adapters": frozenset({"config", "domain", "infrastructure", "shared", "tools"}),
    "application": frozenset({"adapters", "config", "domain", "infrastructure", "shared", "tools"}),
    "api": frozenset({"adapters", "application", "config", "domain", "infrastructure", "shared", "tools"}),
}

# Operators only rewrite in-memory schedules; geocoding reaches them through an injected tool.
OPERATORS_PACKAGE = f"{PACKAGE}.domain.operators"
OPERATOR_FORBIDDEN_MODULES = frozenset(
    {"dotenv", "fastapi", "httpx", "os", "requests", "shutil", "socket", "subprocess", "threading"}
)


class Violation(NamedTuple):
    path: Path
    lineno: int
    source: str
    target: str
    reason: str

    def render(self) -> str:
        return f"{self.path.as_posix()}:{self.lineno} {self.source} -> {self.target}: {self.reason}"


def _module_name(path: Path, root: Path) -> str:
    parts = [root.name, *path.relative_to(root).with_suffix("").parts]
    if parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts)


def _layer(module: str) -> str | None:
    parts = module.split(".")
    if len(parts) < 2 or parts[0] != PACKAGE:
        return None
    return parts[1] if parts[1] in ALLOWED_DEPENDENCIES else None


def _imports(tree: ast.AST, module: str, is_package: bool) -> Iterator[tuple[int, str]]:
    """Yield ``(lineno, absolute module)`` for every import, resolving relative ones."""
    package = module.split(".") if is_package else module.split(".")[:-1]
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom):
            if node.level == 0:
                if node.module:
                    yield node.lineno, node.module
                continue
            keep = len(package) - (node.level - 1)
            if keep <= 0:
                continue
            base = package[:keep]
            if node.module:
                yield node.lineno, ".".join([*base, node.module])
            else:
                for alias in node.names:
                    if alias.name != "*":
                        yield node.lineno, ".".join([*base, alias.name])


def _rule_for(source: str, target: str) -> str | None:
    if source.startswith(OPERATORS_PACKAGE) and target.split(".")[0] in OPERATOR_FORBIDDEN_MODULES:
        return f"operators must stay in memory and may not import {target.split('.')[0]}"
    source_layer, target_layer = _layer(source), _layer(target)
    if source_layer is None or target_layer is None or source_layer == target_layer:
        return None
    if target_layer not in ALLOWED_DEPENDENCIES[source_layer]:
        return f"{source_layer} layer must not import {target_layer} layer"
    return None


def find_violations(root: str | Path = PACKAGE) -> list[Violation]:
    root_path = Path(root)
    found: list[Violation] = []
    for path in sorted(root_path.rglob("*.py")):
        if "__pycache__" in path.parts:
            continue
        source = _module_name(path, root_path)
        try:
            tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        except (OSError, SyntaxError, UnicodeDecodeError) as exc:
            found.append(Violation(path, getattr(exc, "lineno", None) or 1, source, "?", f"unreadable module: {exc}"))
            continue
        for lineno, target in _imports(tree, source, path.name == "__init__.py"):
            reason = _rule_for(source, target)
            if reason:
                found.append(Violation(path, lineno, source, target, reason))
    return found


def check_import_boundaries(root: str | Path = PACKAGE) -> list[str]:
    return sorted({violation.render() for violation in find_violations(root)})


def main() -> int:
    parser = argparse.ArgumentParser(description="Check layer imports and operator purity")
    parser.add_argument("--root", default=PACKAGE, help="Package directory to scan")
    violations = check_import_boundaries(parser.parse_args().root)
    if violations:
        print("Import boundary violations:")
        for line in violations:
            print(f"- {line}")
        return 1
    print("Import boundary check passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
