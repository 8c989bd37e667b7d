"""Tests for the qadd command-line interface."""

import logging

import pytest
from click.testing import CliRunner

from qadd import cli as cli_module
from qadd.indexing import IngestSummary, indexer

from conftest import FakeStore


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logging.getLogger("qadd").handlers.clear()


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def recorded(monkeypatch):
    calls = []

    def fake_ingest(kind):
        def ingest(path, cfg, collection):
            calls.append((kind, path, cfg, collection))
            return IngestSummary(kind=kind, file="in", collection=collection, succeeded=4, total=5)
        return ingest

    monkeypatch.setattr(cli_module, "index_document", fake_ingest("docs"))
    monkeypatch.setattr(cli_module, "index_functions", fake_ingest("functions"))
    return calls


def test_docs_passes_options_to_config(runner, recorded):
    result = runner.invoke(cli_module.cli, [
        "docs", "--file", "manual.txt", "--collection", "manual-docs",
        "--chunk", "800", "--overlap", "50", "--batch", "16", "--strategy", "recursive",
        "--dim", "768", "--qdrant", "http://qdrant:6333",
    ])

    assert result.exit_code == 0, result.output
    assert "docs: upserted 4/5 into manual-docs" in result.output
    ((kind, path, cfg, collection),) = recorded
    assert (kind, path, collection) == ("docs", "manual.txt", "manual-docs")
    assert cfg["chunking"] == {"strategy": "recursive", "target_chars": 800,
                               "overlap_chars": 50, "batch_size": 16}
    assert cfg["embedding"]["vector_size"] == 768
    assert cfg["vector_store"]["qdrant"]["url"] == "http://qdrant:6333"


def test_embedding_backend_options(runner, recorded):
    result = runner.invoke(cli_module.cli, [
        "functions", "--file", "app.js", "--collection", "fns",
        "--backend", "sentence_transformers", "--max-tokens", "512",
    ])

    assert result.exit_code == 0, result.output
    ((_, _, cfg, _),) = recorded
    assert cfg["embedding"]["backend"] == "sentence_transformers"
    assert cfg["embedding"]["max_tokens"] == 512


def test_functions_uses_defaults(runner, recorded):
    result = runner.invoke(cli_module.cli, ["functions", "--file", "app.js", "--collection", "fns"])

    assert result.exit_code == 0, result.output
    assert "functions: upserted 4/5 into fns" in result.output
    ((_, _, cfg, _),) = recorded
    assert cfg["code"]["class_context"] == "document"
    assert cfg["code"]["language"] is None
    assert cfg["embedding"]["backend"] == "ollama"
    assert cfg["embedding"]["max_tokens"] is None


@pytest.mark.parametrize("args", [
    ["docs", "--collection", "c"],
    ["docs", "--file", "a.txt"],
    ["functions", "--collection", "c"],
])
def test_missing_required_input_exits_2(runner, recorded, args):
    result = runner.invoke(cli_module.cli, args)
    assert result.exit_code == 2
    assert recorded == []


def test_runtime_failure_exits_1(runner, monkeypatch):
    def boom(path, cfg, collection):
        raise RuntimeError("collection create failed")

    monkeypatch.setattr(cli_module, "index_document", boom)
    result = runner.invoke(cli_module.cli, ["docs", "--file", "a.txt", "--collection", "c"])

    assert result.exit_code == 1
    assert "collection create failed" in result.output


def test_invalid_option_value_exits_1(runner, recorded):
    result = runner.invoke(cli_module.cli, ["docs", "--file", "a.txt", "--collection", "c",
                                            "--chunk", "0"])
    assert result.exit_code == 1
    assert recorded == []


def test_missing_file_exits_1(runner, tmp_path, monkeypatch):
    monkeypatch.setattr(indexer, "make_vector_store", lambda cfg, collection_name: FakeStore(collection_name))
    result = runner.invoke(cli_module.cli, ["docs", "--file", str(tmp_path / "nope.txt"),
                                            "--collection", "c"])
    assert result.exit_code == 1
    assert "nope.txt" in result.output
