"""Shared pytest fixtures and test helpers for copyrec tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from copyrec.config.settings import CopyrecSettings
from copyrec.domain.schema import NestedGroup, SchemaBuilder

CUSTOMER_TOML = """\
name = "customer"

[[fields]]
name = "id"
type = "alphanumeric"
length = 10

[[fields]]
name = "count"
type = "numeric"
length = 5

[[fields]]
name = "address"

[[fields.fields]]
name = "street"
type = "PIC X"
length = 20

[[fields.fields]]
name = "city"
type = "ALPHANUMERIC"
length = 10
"""

CUSTOMER_RECORD = "ABC123    00042Main Street         New York  "

CUSTOMER_VALUES = {
    "id": "ABC123",
    "count": "42",
    "address": {"street": "Main Street", "city": "New York"},
}


def build_customer_schema() -> NestedGroup:
    """The id/count/address layout used throughout the test suite."""
    return (
        SchemaBuilder("customer")
        .alphanumeric("id", 10)
        .numeric("count", 5)
        .group(
            "address",
            SchemaBuilder("address").alphanumeric("street", 20).alphanumeric("city", 10),
        )
        .build()
    )


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def customer_schema() -> NestedGroup:
    return build_customer_schema()


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    """customer.toml written to a temp directory."""
    path = tmp_path / "customer.toml"
    path.write_text(CUSTOMER_TOML, encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CopyrecSettings:
    """Default settings isolated from any ambient copyrec.toml."""
    monkeypatch.delenv("COPYREC_CONFIG", raising=False)
    return CopyrecSettings.from_cli(project_root=tmp_path)


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so config discovery finds nothing stray.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.delenv("COPYREC_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
