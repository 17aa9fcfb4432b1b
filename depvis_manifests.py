"""
depvis_manifests.py
Чтение package.json: пути приходят построчно (обычно из stdin),
на выходе список пар (имя пакета, [зависимости]).
"""
import json
import logging
import os
import sys
from typing import Iterable, List, Optional, TextIO, Tuple

from depvis_errors import ManifestReadError

log = logging.getLogger(__name__)

DEPENDENCY_FIELDS = ("dependencies", "devDependencies")


def read_paths(stream: Optional[TextIO] = None) -> List[str]:
    stream = stream if stream is not None else sys.stdin
    return [line.strip() for line in stream if line.strip()]


def resolve_path(path: str, working_directory: Optional[str] = None) -> str:
    if not os.path.isabs(path) and working_directory:
        return os.path.join(working_directory, path)
    return path


def read_manifest(path: str):
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestReadError(path, e) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


def manifest_dependencies(manifest: dict) -> List[str]:
    deps: List[str] = []
    for field in DEPENDENCY_FIELDS:
        section = manifest.get(field) or {}
        if isinstance(section, dict):
            deps.extend(section.keys())
    return deps


def load_manifests(paths: Iterable[str], working_directory: Optional[str] = None) -> List[Tuple[str, List[str]]]:
    paths = list(paths)
    packages: List[Tuple[str, List[str]]] = []
    for p in paths:
        manifest = read_manifest(resolve_path(p, working_directory))
        if manifest is None:
            log.debug("skipping %s (unparseable)", p)
            continue
        name = manifest.get("name") if isinstance(manifest, dict) else None
        if name is None:
            log.debug("skipping %s (no name)", p)
            continue
        if not isinstance(name, str):
            log.debug("skipping %s (name is not a string: %r)", p, name)
            continue
        packages.append((name, manifest_dependencies(manifest)))
    log.debug("loaded %d of %d manifests", len(packages), len(paths))
    return packages
