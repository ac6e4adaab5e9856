from __future__ import annotations

import pytest

import main as cli
from rag import rag_engine
from utils.config import Settings


class TestSearchCommand:
    """Test the search command's output."""

    def test_prints_ranked_results(self, engine, capsys):
        engine.process_text("xxxxyyyy")
        code = cli.main(["search", "x"], settings=Settings(), engine=engine)

        out = capsys.readouterr().out
        assert code == 0
        assert "[1] Score: 1.0000" in out
        assert "xxxx" in out
        assert "yyyy" not in out

    def test_no_results(self, engine, capsys):
        code = cli.main(["search", "x"], settings=Settings(), engine=engine)
        assert code == 0
        assert 'No relevant content found for query: "x"' in capsys.readouterr().out

    def test_threshold_flag(self, engine, capsys):
        engine.process_text("xxxy")
        cli.main(["search", "x", "--threshold", "0.99"], settings=Settings(), engine=engine)
        assert "No relevant content found" in capsys.readouterr().out

    def test_top_n_defaults_from_settings(self, engine, capsys):
        engine.process_text("xxxxxxxy")
        cli.main(["search", "x"], settings=Settings(top_n=1), engine=engine)
        out = capsys.readouterr().out
        assert "[1]" in out
        assert "[2]" not in out


class TestIngestCommand:
    def test_ingest_file(self, engine, monkeypatch, tmp_path, capsys):
        monkeypatch.setattr(rag_engine, "extract_text", lambda path: "xxxx")
        pdf = tmp_path / "a.pdf"
        pdf.write_bytes(b"")

        code = cli.main(["ingest", str(pdf)], settings=Settings(), engine=engine)

        out = capsys.readouterr().out
        assert code == 0
        assert "(a.pdf): 1 embeddings stored" in out
        assert "Ingested 1 document(s)." in out

    def test_ingest_error_exits_nonzero(self, engine, tmp_path, capsys):
        code = cli.main(["ingest", str(tmp_path / "missing.pdf")], settings=Settings(), engine=engine)
        assert code == 1
        assert "Could not read PDF file" in capsys.readouterr().err


class TestAskCommand:
    def test_no_content(self, engine, capsys):
        code = cli.main(["ask", "what?"], settings=Settings(), engine=engine)
        assert code == 0
        assert "No relevant content was found" in capsys.readouterr().out


class TestResetCommand:
    def test_reset(self, engine, capsys):
        engine.process_text("xxxx")
        assert cli.main(["reset"], settings=Settings(), engine=engine) == 0
        assert engine.find_relevant_content("x") is None


class TestPreview:
    def test_truncates(self):
        assert cli.preview("a" * 600) == "a" * 500 + "..."
        assert cli.preview("short") == "short"


class TestArgumentValidation:
    @pytest.mark.parametrize("value", ["0", "-2", "two"])
    def test_top_n_must_be_positive(self, engine, value):
        with pytest.raises(SystemExit) as exc:
            cli.main(["search", "x", "--top-n", value], settings=Settings(), engine=engine)
        assert exc.value.code == 2

    def test_bad_chunk_settings_exit_nonzero(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("CHUNK_SIZE", "100")
        monkeypatch.setenv("CHUNK_OVERLAP", "100")
        monkeypatch.setenv("DB_DIR", str(tmp_path / "db"))

        code = cli.main(["ingest", str(tmp_path / "a.pdf")])

        assert code == 1
        assert "CHUNK_OVERLAP must be in" in capsys.readouterr().err
