"""Tests for the command line entry point."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

import main
from table_decoder.pipeline import TableDecodePipeline

from tests.conftest import FakeFetcher


@pytest.fixture
def use_markup(monkeypatch):
    def _use(markup):
        fetcher = FakeFetcher(markup)
        monkeypatch.setattr(main, "TableDecodePipeline",
                            lambda config: TableDecodePipeline(config, fetcher=fetcher))
        return fetcher
    return _use


class TestMain:

    def test_prints_message(self, use_markup, capsys, google_doc_html, google_doc_lines):
        use_markup(google_doc_html)
        assert main.main(["https://docs.example/pub"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "The secret message is..."
        assert out[1:] == google_doc_lines

    def test_prompts_for_url(self, use_markup, monkeypatch, capsys, google_doc_html):
        fetcher = use_markup(google_doc_html)
        prompts = []
        monkeypatch.setattr("builtins.input", lambda prompt: prompts.append(prompt) or " https://docs.example/pub ")
        assert main.main([]) == 0
        assert prompts == ["What's the google doc url? "]
        assert fetcher.urls == ["https://docs.example/pub"]

    def test_empty_prompt(self, use_markup, monkeypatch):
        use_markup(None)
        monkeypatch.setattr("builtins.input", lambda prompt: "")
        assert main.main([]) == 2

    def test_closed_input(self, use_markup, monkeypatch):
        use_markup(None)

        def closed(prompt):
            raise EOFError

        monkeypatch.setattr("builtins.input", closed)
        assert main.main([]) == 2

    def test_no_data(self, use_markup, capsys):
        use_markup(None)
        assert main.main(["https://docs.example/pub"]) == 1
        assert "no table data could be retrieved" in capsys.readouterr().out

    def test_nothing_to_display(self, use_markup, capsys):
        use_markup("<table><tr><td>a</td></tr><tr><td>1</td></tr></table>")
        assert main.main(["https://docs.example/pub"]) == 1
        assert "nothing to display" in capsys.readouterr().out

    def test_save_outputs(self, use_markup, tmp_path, google_doc_html):
        use_markup(google_doc_html)
        out = tmp_path / "out"
        assert main.main(["https://docs.example/pub", "--save-json", "-o", str(out)]) == 0
        assert (out / "records.json").exists()

    def test_invalid_config_is_usage_error(self, use_markup):
        use_markup(None)
        with pytest.raises(SystemExit) as exc:
            main.main(["https://docs.example/pub", "--timeout", "0"])
        assert exc.value.code == 2
