"""
Tests for the towerguess command line
"""
import json

import requests
from click.testing import CliRunner

from towerguess.cli import cli
from towerguess.core import lookup


class FakeResponse:
    text = "Acronym,Name\nToM,Tower of Misery\n"

    def raise_for_status(self):
        pass


def test_build_success(tmp_path, monkeypatch):
    images = tmp_path / "images"
    images.mkdir()
    (images / "ToM.png").write_bytes(b"\x89PNG")
    output = tmp_path / "towers.json"
    monkeypatch.setattr(lookup.requests, "get", lambda url, timeout: FakeResponse())

    result = CliRunner().invoke(cli, [
        "build", "--sheet-url", "https://sheet.example/export",
        "--images-dir", str(images), "--output", str(output),
    ])

    assert result.exit_code == 0, result.output
    assert "towers.json generated" in result.output
    document = json.loads(output.read_text(encoding="utf-8"))
    assert document["defaultImages"] == [{"url": "/images/ToM.png", "answers": ["ToM", "Tower of Misery"]}]


def test_build_network_failure_exits_nonzero(tmp_path, monkeypatch):
    images = tmp_path / "images"
    images.mkdir()
    output = tmp_path / "towers.json"

    def fake_get(url, timeout):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(lookup.requests, "get", fake_get)

    result = CliRunner().invoke(cli, ["build", "--images-dir", str(images), "--output", str(output)])

    assert result.exit_code == 1
    assert "Could not fetch tower names" in result.output
    assert not output.exists()


def test_build_missing_image_folder(tmp_path, monkeypatch):
    monkeypatch.setattr(lookup.requests, "get", lambda url, timeout: FakeResponse())
    output = tmp_path / "towers.json"

    result = CliRunner().invoke(cli, [
        "build", "--images-dir", str(tmp_path / "nowhere"), "--output", str(output),
    ])

    assert result.exit_code == 1
    assert "Image folder not found" in result.output
    assert not output.exists()


def test_build_unknown_config(tmp_path):
    result = CliRunner().invoke(cli, ["build", "--config", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_check_missing_catalog(tmp_path):
    result = CliRunner().invoke(cli, ["check", "--catalog", str(tmp_path / "towers.json")])
    assert result.exit_code == 1
    assert "Catalog file not found" in result.output


def test_check_warns_but_succeeds(tmp_path):
    catalog = tmp_path / "towers.json"
    catalog.write_text(json.dumps({
        "defaultImages": [
            {"url": "/images/ToX.png", "answers": ["ToX", "ToX"]},
            {"url": "/images/ToM.png", "answers": ["ToM", "Tower of Misery"]},
        ],
        "pomImages": [],
    }), encoding="utf-8")

    result = CliRunner().invoke(cli, ["check", "--catalog", str(catalog)])

    assert result.exit_code == 0
    assert "Duplicate answers in defaultImages for /images/ToX.png: [ToX, ToX]" in result.output
    assert "/images/ToM.png" not in result.output


def test_check_clean_catalog(tmp_path):
    catalog = tmp_path / "towers.json"
    catalog.write_text(json.dumps({"defaultImages": [], "pomImages": []}), encoding="utf-8")

    result = CliRunner().invoke(cli, ["check", "--catalog", str(catalog)])

    assert result.exit_code == 0
    assert "No duplicate answers found" in result.output


def test_check_reports_malformed_pools(tmp_path):
    """Wrong-shaped pools are warnings, not a crash"""
    catalog = tmp_path / "towers.json"
    catalog.write_text(json.dumps({
        "defaultImages": 5,
        "pomImages": [{"url": "/images/PoM/WaT.jpg", "answers": "WaT"}],
    }), encoding="utf-8")

    result = CliRunner().invoke(cli, ["check", "--catalog", str(catalog)])

    assert result.exit_code == 0, result.output
    assert "Invalid answers in defaultImages for ?" in result.output
    assert "Invalid answers in pomImages for /images/PoM/WaT.jpg" in result.output
