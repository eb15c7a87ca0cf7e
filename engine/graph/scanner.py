"""
Minimal go.mod scanner producing a node/edge scan result for the graph store.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from config import DEFAULT_SCAN_ROOT
from engine.errors import ScanError

log = logging.getLogger(__name__)

_MODULE_RE = re.compile(r"^module\s+(\S+)")
_REQUIRE_LINE_RE = re.compile(r"^require\s+(\S+)\s+\S+")
_BLOCK_ENTRY_RE = re.compile(r"^(\S+)\s+\S+")


@dataclass(frozen=True)
class ScanResult:
    nodes: List[str]
    edges: List[Tuple[str, str]]


def _strip_comment(line: str) -> str:
    return line.split("//", 1)[0].strip()


def parse_go_mod(text: str) -> Tuple[Optional[str], List[str]]:
    module: Optional[str] = None
    requires: List[str] = []
    in_block = False

    for raw in text.splitlines():
        line = _strip_comment(raw)
        if not line:
            continue
        if in_block:
            if line == ")":
                in_block = False
                continue
            match = _BLOCK_ENTRY_RE.match(line)
            if match:
                requires.append(match.group(1).strip('"'))
            continue
        if line.startswith("require") and line.endswith("("):
            in_block = True
            continue
        match = _MODULE_RE.match(line)
        if match:
            module = match.group(1).strip('"')
            continue
        match = _REQUIRE_LINE_RE.match(line)
        if match:
            requires.append(match.group(1).strip('"'))

    return module, requires


def scan_go_module(repo_path: str) -> ScanResult:
    """Read ``<repo_path>/go.mod`` and return the module and its direct requirements."""
    gomod = os.path.join(repo_path, "go.mod")
    try:
        with open(gomod, encoding="utf-8") as fh:
            text = fh.read()
    except OSError as exc:
        raise ScanError(f"cannot read {gomod}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise ScanError(f"cannot decode {gomod}: {exc.reason} at byte {exc.start}") from exc

    module, requires = parse_go_mod(text)
    root = module or DEFAULT_SCAN_ROOT
    nodes = [root]
    edges: List[Tuple[str, str]] = []
    for dep in requires:
        if dep not in nodes:
            nodes.append(dep)
        edges.append((root, dep))

    log.info("Scanned %s: %d requirements", gomod, len(requires))
    return ScanResult(nodes=nodes, edges=edges)
