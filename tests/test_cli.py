"""Tests for the ``n8nhub workspaces`` command."""

from __future__ import annotations

import os

import pytest
from click.testing import CliRunner

from n8nhub.cli import main


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in list(os.environ):
        if key.startswith(("N8N_", "N8NHUB_")):
            monkeypatch.delenv(key)
    return monkeypatch


def test_workspaces_lists_discovered(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("N8N_URL_A", "https://a.example.com")
    clean_env.setenv("N8N_TOKEN_A", "tok-a")
    clean_env.setenv("N8N_URL_B", "https://b.example.com")
    clean_env.setenv("N8N_TOKEN_B", "tok-b")
    clean_env.setenv("N8N_DEFAULT_WORKSPACE", "B")

    result = CliRunner().invoke(main, ["workspaces"])

    assert result.exit_code == 0, result.output
    assert "Multi-workspace mode" in result.output
    assert "* b" in result.output
    assert "https://a.example.com" in result.output
    assert "tok-" not in result.output


def test_workspaces_none_configured(clean_env: pytest.MonkeyPatch) -> None:
    result = CliRunner().invoke(main, ["workspaces"])

    assert result.exit_code == 0
    assert "No workspaces configured" in result.output
