"""End-to-end tests for the ``docnav`` commands.

The command functions are called directly with a temporary site: a
``docnav.yaml`` plus a small ``docs`` folder. Logging reconfiguration is
stubbed so loguru keeps the handlers installed by the test session.
"""

from __future__ import annotations

from pathlib import Path

import msgspec.json as msgspec_json
import pytest
from bs4 import BeautifulSoup

from docnav import cli
from docnav.models import DocNode, GroupNode

SOURCES = {
    "index.md": "# Home\n\nWelcome.\n",
    "guide/intro.md": (
        "---\ntitle: Introduction\nlastUpdated: 2024-05-01\n---\n"
        "# Intro\n\n> [!tip] Read the start page next.\n"
    ),
    "guide/start.md": "# Start\n\n```python\nprint('hi')\n```\n",
}


@pytest.fixture
def site_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Write a docs folder and an overrides-style config; return its path."""
    docs_dir = tmp_path / "docs"
    for relative, text in SOURCES.items():
        path = docs_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    config_path = tmp_path / "docnav.yaml"
    config_path.write_text(
        """
docs_dir: docs
site_name: Handbook
sidebar:
  order: [index, guide]
  childrenOrder:
    guide: [guide/start]
""".strip()
        + "\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(cli, "_configure_logging", lambda *, verbose: None)
    return config_path


def test_build_writes_documents_and_sidebar(
    site_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """The bundle lists sorted documents and a typed sidebar tree."""
    cli.build(config=site_config)
    output = site_config.parent / "public" / "docs.json"
    assert capsys.readouterr().out.strip().endswith("docs.json")

    payload = msgspec_json.decode(output.read_bytes())
    slugs = [document["slug"] for document in payload["documents"]]
    assert slugs == ["guide/intro", "guide/start", "index"]
    intro = payload["documents"][0]
    assert intro["title"] == "Introduction"
    assert intro["last_updated"] == "2024-05-01"
    assert 'class="callout callout--tip"' in intro["html"]

    home, guide = payload["sidebar"]
    assert home == {"path": "index", "label": "Home", "slug": "index", "type": "doc"}
    assert guide["type"] == "group"
    assert [child["path"] for child in guide["children"]] == [
        "guide/start",
        "guide/intro",
    ]


def test_build_honours_output_override(site_config: Path, tmp_path: Path) -> None:
    target = tmp_path / "out" / "bundle.json"
    cli.build(config=site_config, output=target)
    assert target.is_file()
    assert not (site_config.parent / "public" / "docs.json").exists()


def test_sidebar_prints_indented_tree(
    site_config: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.sidebar(config=site_config)
    assert capsys.readouterr().out.splitlines() == [
        "Home (index)",
        "Guide/ (guide)",
        "  Start (guide/start)",
        "  Introduction (guide/intro)",
    ]


def test_export_writes_one_page_per_document(
    site_config: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Pages embed the sidebar, mark the active entry, and link relatively."""
    output_dir = tmp_path / "site"
    cli.export(config=site_config, output_dir=output_dir)
    assert len(capsys.readouterr().out.splitlines()) == 3

    soup = BeautifulSoup(
        (output_dir / "guide" / "intro.html").read_text(encoding="utf-8"),
        "html.parser",
    )
    assert soup.title.get_text() == "Introduction | Handbook"
    active = soup.select_one("li.sidebar__doc--active a")
    assert active.get_text() == "Introduction"
    assert active["href"] == "../guide/intro.html"
    home = soup.select_one("a[href='../index.html']")
    assert home is not None
    assert home.get_text() == "Home"
    assert soup.select_one(".doc__updated").get_text() == "Updated 2024-05-01"
    assert soup.select_one("article.doc__body div.callout--tip") is not None
    assert ".hljs" in soup.style.get_text()

    start = BeautifulSoup(
        (output_dir / "guide" / "start.html").read_text(encoding="utf-8"),
        "html.parser",
    )
    assert start.select_one("pre.code-block span.code-language").get_text() == "python"


def test_missing_config_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "_configure_logging", lambda *, verbose: None)
    with pytest.raises(FileNotFoundError):
        cli.sidebar(config=tmp_path / "missing.yaml")


def test_format_tree_marks_groups() -> None:
    nodes = [
        GroupNode(
            path="api",
            label="API",
            children=[DocNode(path="api/ref", label="Reference", slug="api/ref")],
        )
    ]
    assert cli.format_tree(nodes) == ["API/ (api)", "  Reference (api/ref)"]
