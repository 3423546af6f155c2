"""
Unit tests for the interactive search program.
"""

import pytest

from lexisearch import search_cli


def scripted(*queries):
    """Return an input() replacement answering with queries, then EOF"""
    answers = iter(queries)

    def read_query(prompt):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    return read_query


class TestRunSearchLoop:
    """Test the query loop over a prepared index"""

    def test_prints_ranked_results(self, word_index, word_records, capsys):
        search_cli.run_search_loop(word_index, word_records, read_query=scripted("new", ""))

        out = capsys.readouterr().out
        assert "Indexed 4 records under 6 keys." in out
        assert "Top 2 of 2 results:" in out

    def test_no_match_and_no_terms(self, word_index, word_records, capsys):
        search_cli.run_search_loop(word_index, word_records, read_query=scripted("paris", "!!"))

        out = capsys.readouterr().out
        assert "No records matched all query terms." in out
        assert "No valid terms in query." in out

    def test_top_k_limits_output(self, word_index, word_records, capsys):
        search_cli.run_search_loop(word_index, word_records, top_k=1, read_query=scripted("city"))

        out = capsys.readouterr().out
        assert "Top 1 of 2 results:" in out
        assert " 2. " not in out


class TestMain:
    """Test end-to-end runs of the program"""

    def test_cities(self, cities_file, monkeypatch, capsys):
        monkeypatch.setattr("builtins.input", scripted("frankfurt", "frankfurt main"))

        search_cli.main(["--cities", str(cities_file)])

        out = capsys.readouterr().out
        assert "Indexed 4 records" in out
        assert "Top 2 of 2 results:" in out
        assert "Top 1 of 1 results:" in out
        assert "Frankfurt am Main, Germany" in out
        assert "relevance=750000" in out

    def test_documents(self, tmp_path, monkeypatch, capsys):
        docs = tmp_path / "docs"
        docs.mkdir()
        (docs / "a.html").write_text("<p>running cities</p>", encoding="utf-8")
        (docs / "b.html").write_text("<p>quiet towns</p>", encoding="utf-8")
        monkeypatch.setattr("builtins.input", scripted("city run"))

        search_cli.main(["--docs", str(docs), "--stem"])

        out = capsys.readouterr().out
        assert "Top 1 of 1 results:" in out
        assert "a.html" in out

    def test_stem_rejected_for_cities(self, cities_file, capsys):
        with pytest.raises(SystemExit) as excinfo:
            search_cli.main(["--cities", str(cities_file), "--stem"])

        assert excinfo.value.code == 2
        assert "--stem only applies to --docs" in capsys.readouterr().err

    def test_source_required(self):
        with pytest.raises(SystemExit):
            search_cli.main([])

    def test_empty_corpus_exits(self, tmp_path):
        empty = tmp_path / "cities.tsv"
        empty.write_text("# nothing here\n", encoding="utf-8")

        with pytest.raises(SystemExit) as excinfo:
            search_cli.main(["--cities", str(empty)])
        assert excinfo.value.code == 1
