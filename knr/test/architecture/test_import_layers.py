from __future__ import annotations

import pytest

from ._utils import iter_source_files, knr_root, matches_prefix, parse_imports

# Each package may import only from the packages listed for it.
_LOWER_LAYERS = {
    "core": (),
    "platform": ("knr.core", "knr.output.console"),
    "git": ("knr.core", "knr.platform"),
    "output": ("knr.core", "knr.services.newrelease.errors"),
    "services": ("knr.core", "knr.platform", "knr.git", "knr.output", "knr.services"),
}


@pytest.mark.parametrize("package", sorted(_LOWER_LAYERS))
def test_package_imports_only_lower_layers(package: str) -> None:
    root = knr_root()
    allowed = _LOWER_LAYERS[package]
    offenders: list[str] = []

    for file_path in iter_source_files(root / package):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            if not matches_prefix(item.module, "knr") or item.module == "knr":
                continue
            if matches_prefix(item.module, f"knr.{package}"):
                continue
            if any(matches_prefix(item.module, prefix) for prefix in allowed):
                continue
            offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")

    assert not offenders, f"{package} layering violations:\n" + "\n".join(offenders)
