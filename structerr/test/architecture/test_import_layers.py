from __future__ import annotations

from ._gate import require_arch_checks_enabled
from ._utils import iter_source_files, matches_prefix, package_root, parse_imports

# Presentation-layer packages; only they may talk to a terminal.
_PRESENTATION = ("cli", "output")


def _offenders(predicate) -> list[str]:
    root = package_root()
    found: list[str] = []
    for file_path in iter_source_files():
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            if predicate(rel, item.module):
                found.append(f"{rel.as_posix()}:{item.line}: forbidden import '{item.module}'")
    return found


def test_core_is_a_leaf_layer() -> None:
    require_arch_checks_enabled()

    def violates(rel, module: str) -> bool:
        if rel.parts[0] != "core":
            return False
        return matches_prefix(module, "structerr") and not matches_prefix(module, "structerr.core")

    offenders = _offenders(violates)
    assert not offenders, "core -> framework dependency violations:\n" + "\n".join(offenders)


def test_framework_does_not_import_presentation() -> None:
    require_arch_checks_enabled()

    def violates(rel, module: str) -> bool:
        if rel.parts[0] in _PRESENTATION:
            return False
        return any(matches_prefix(module, f"structerr.{p}") for p in _PRESENTATION)

    offenders = _offenders(violates)
    assert not offenders, "framework -> cli/output violations:\n" + "\n".join(offenders)


def test_terminal_libraries_stay_in_presentation() -> None:
    require_arch_checks_enabled()

    def violates(rel, module: str) -> bool:
        if rel.parts[0] in _PRESENTATION:
            return False
        return matches_prefix(module, "rich") or matches_prefix(module, "typer")

    offenders = _offenders(violates)
    assert not offenders, "rich/typer usage outside cli/output:\n" + "\n".join(offenders)
