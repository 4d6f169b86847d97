"""Tests for the stockcrawl CLI commands."""

from pathlib import Path

import httpx
import pytest
import respx
from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()

BASE = "http://www.finanzen.net"
SEARCH_URL = f"{BASE}/aktien/aktien_suche.asp"
SEARCH_FORM = r".*/aktien/aktien_suche\.asp$"
FIXTURES = Path(__file__).parent / "fixtures"


def _fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def site(monkeypatch):
    """Pin the target site so env overrides cannot leak into the tests."""
    monkeypatch.setattr("stockcrawl.config.settings.base_url", BASE)
    monkeypatch.setattr("stockcrawl.config.settings.escape_urls", True)


def test_indexes_lists_every_index():
    with respx.mock:
        respx.get(url__regex=SEARCH_FORM).mock(return_value=httpx.Response(200, text=_fixture("dax.html")))
        result = runner.invoke(app, ["indexes"])

    assert result.exit_code == 0
    assert "[indexes] 197 index(es)." in result.stdout


def test_indexes_when_offline():
    with respx.mock:
        respx.get(url__regex=SEARCH_FORM).mock(side_effect=httpx.ConnectTimeout)
        result = runner.invoke(app, ["indexes"])

    assert result.exit_code == 0
    assert "No indexes found" in result.stdout


def test_stocks_lists_links_and_pages():
    with respx.mock:
        respx.get(url__regex=r".*[?&]inIndex=9(&|$)").mock(
            return_value=httpx.Response(200, text=_fixture("nasdaq.html"))
        )
        result = runner.invoke(app, ["stocks", "aktien/aktien_suche.asp?inIndex=9"])

    assert result.exit_code == 0
    assert f"{BASE}/aktien/Nestl%C3%A9-Aktie" in result.stdout
    assert "[stocks] 50 stock(s), 2 linked page(s)." in result.stdout


def test_stocks_without_response_fails():
    with respx.mock:
        respx.get(url__regex=r".*[?&]inIndex=9(&|$)").mock(side_effect=httpx.ReadTimeout)
        result = runner.invoke(app, ["stocks", "aktien/aktien_suche.asp?inIndex=9"])

    assert result.exit_code == 1
    assert "❌ No response" in result.stdout


def test_run_single_index(tmp_path):
    with respx.mock:
        respx.get(url__regex=r".*[?&]inIndex=9(&|$)").mock(
            return_value=httpx.Response(200, text=_fixture("nasdaq.html"))
        )
        result = runner.invoke(
            app, ["run", "--index", "9", "--drop-box", str(tmp_path), "--workers", "2"]
        )

    assert result.exit_code == 0
    assert "✅ 3 file(s) written" in result.stdout
    (drop_box,) = list(tmp_path.iterdir())
    assert len(list(drop_box.glob("*.txt"))) == 3


def test_run_raw_urls(tmp_path):
    with respx.mock:
        respx.get(url__regex=r".*[?&]inIndex=1(&|$)").mock(
            return_value=httpx.Response(200, text=_fixture("dax.html"))
        )
        result = runner.invoke(app, ["run", "-i", "1", "--drop-box", str(tmp_path), "--raw-urls"])

    assert result.exit_code == 0
    (drop_box,) = list(tmp_path.iterdir())
    (batch,) = list(drop_box.iterdir())
    assert f"{BASE}/aktien/Henkel vz-Aktie\n" in batch.read_text(encoding="utf-8")


def test_run_without_indexes(tmp_path):
    with respx.mock:
        respx.get(url__regex=SEARCH_FORM).mock(return_value=httpx.Response(200, text="<html></html>"))
        result = runner.invoke(app, ["run", "--drop-box", str(tmp_path)])

    assert result.exit_code == 0
    assert "Nothing to crawl" in result.stdout
    assert list(tmp_path.iterdir()) == []


def test_run_reports_filesystem_errors(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    result = runner.invoke(app, ["run", "-i", "1", "--drop-box", str(blocker)])

    assert result.exit_code == 1
    assert "❌ Error:" in result.stdout
