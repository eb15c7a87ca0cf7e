"""
go.mod scanner tests.
"""

import pytest

from engine.errors import ScanError
from engine.graph.scanner import parse_go_mod, scan_go_module

GO_MOD = """module github.com/acme/payments

go 1.21

require github.com/gorilla/websocket v1.5.0

require (
\tgolang.org/x/mod v0.14.0
\tgithub.com/stretchr/testify v1.8.4 // indirect
\t// a comment line
)
"""


def test_parse_go_mod():
    module, requires = parse_go_mod(GO_MOD)
    assert module == "github.com/acme/payments"
    assert requires == [
        "github.com/gorilla/websocket",
        "golang.org/x/mod",
        "github.com/stretchr/testify",
    ]


def test_scan_go_module(tmp_path):
    (tmp_path / "go.mod").write_text(GO_MOD)
    result = scan_go_module(str(tmp_path))
    assert result.nodes[0] == "github.com/acme/payments"
    assert len(result.nodes) == 4
    assert all(frm == "github.com/acme/payments" for frm, _ in result.edges)


def test_scan_without_module_uses_main(tmp_path):
    (tmp_path / "go.mod").write_text("require example.com/dep v0.1.0\n")
    result = scan_go_module(str(tmp_path))
    assert result.nodes == ["main", "example.com/dep"]
    assert result.edges == [("main", "example.com/dep")]


def test_scan_missing_go_mod():
    with pytest.raises(ScanError):
        scan_go_module("does/not/exist")


def test_scan_undecodable_go_mod(tmp_path):
    (tmp_path / "go.mod").write_bytes(b"module \xff\xfe bad\n")
    with pytest.raises(ScanError) as info:
        scan_go_module(str(tmp_path))
    assert "cannot decode" in str(info.value)
