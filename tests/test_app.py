"""
Tests for the command-line interface.
"""

import json
import sys
from unittest.mock import patch

import pytest

from smartsummary import __version__
from smartsummary.app import main
from smartsummary.errors import NotFoundError
from smartsummary.history import load_store
from smartsummary.models import SummaryRecord


@pytest.fixture
def record() -> SummaryRecord:
    return SummaryRecord(
        qid="Q7186",
        label="Marie Curie",
        description="Polish-French physicist and chemist",
        image=None,
        birth_date="1867-11-07",
        death_date="1934-07-04",
        occupations=("physicist", "chemist"),
        wikipedia_url="https://en.wikipedia.org/wiki/Marie%20Curie",
        language="en",
        content_html="<p>Marie Curie was a physicist.</p><p>She won two Nobel prizes.</p>",
        site_title="Marie Curie",
    )


def run_cli(monkeypatch, tmp_path, *argv):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr(sys, "argv", ["smartsummary", *argv])
    main()


class TestSearchCommand:

    @patch("smartsummary.app.resolve_entity")
    def test_prints_summary_and_records_history(self, mock_resolve, record, monkeypatch, tmp_path, capsys):
        mock_resolve.return_value = record
        store = tmp_path / "history.json"

        run_cli(monkeypatch, tmp_path, "search", "marie curie", "--store", str(store))

        out = capsys.readouterr().out
        assert "Marie Curie (Q7186)" in out
        assert "Occupation: physicist, chemist" in out
        assert "Marie Curie was a physicist.\n\nShe won two Nobel prizes." in out
        assert load_store(store)["history"] == ["marie curie"]
        mock_resolve.assert_called_once_with("marie curie", "en")

    @patch("smartsummary.app.resolve_entity")
    def test_json_output(self, mock_resolve, record, monkeypatch, tmp_path, capsys):
        mock_resolve.return_value = record

        run_cli(monkeypatch, tmp_path, "search", "curie", "--lang", "fr", "--json", "--store", str(tmp_path / "h.json"))

        data = json.loads(capsys.readouterr().out)
        assert data["qid"] == "Q7186"
        assert data["wikipediaUrl"] == "https://en.wikipedia.org/wiki/Marie%20Curie"
        mock_resolve.assert_called_once_with("curie", "fr")

    @patch("smartsummary.app.resolve_entity")
    def test_not_found_exits(self, mock_resolve, monkeypatch, tmp_path):
        mock_resolve.side_effect = NotFoundError("No results in Wikidata")
        with pytest.raises(SystemExit, match="No results in Wikidata"):
            run_cli(monkeypatch, tmp_path, "search", "zzzz", "--store", str(tmp_path / "h.json"))


class TestOtherCommands:

    def test_version(self, monkeypatch, tmp_path, capsys):
        run_cli(monkeypatch, tmp_path, "--version")
        assert capsys.readouterr().out.strip() == __version__

    def test_summarize_offline(self, monkeypatch, tmp_path, capsys):
        text_file = tmp_path / "text.txt"
        text_file.write_text("Marie Curie was a physicist and chemist who won two Nobel prizes.\n", encoding="utf-8")

        run_cli(monkeypatch, tmp_path, "summarize", "--input", str(text_file))

        assert capsys.readouterr().out.strip() == (
            "Summary (offline): Marie Curie was a physicist and chemist who won two Nobel prizes."
        )

    def test_summarize_short_text_exits(self, monkeypatch, tmp_path):
        with pytest.raises(SystemExit, match="Insufficient text"):
            run_cli(monkeypatch, tmp_path, "summarize", "--text", "too short")

    def test_note_and_history(self, monkeypatch, tmp_path, capsys):
        store = str(tmp_path / "h.json")
        run_cli(monkeypatch, tmp_path, "note", "Q7186", "--text", "radium", "--store", store)
        run_cli(monkeypatch, tmp_path, "note", "Q7186", "--store", store)
        run_cli(monkeypatch, tmp_path, "history", "--store", store)

        out = capsys.readouterr().out
        assert "Note saved for Q7186." in out
        assert "radium" in out
        assert "No search history." in out


class TestBadPort:

    def test_version_still_works(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("PORT", "eighty")
        run_cli(monkeypatch, tmp_path, "--version")
        assert capsys.readouterr().out.strip() == __version__

    def test_history_still_works(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("PORT", "eighty")
        run_cli(monkeypatch, tmp_path, "history", "--store", str(tmp_path / "h.json"))
        assert "No search history." in capsys.readouterr().out

    def test_serve_reports_bad_port(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PORT", "eighty")
        with pytest.raises(SystemExit, match="PORT must be an integer"):
            run_cli(monkeypatch, tmp_path, "serve")
