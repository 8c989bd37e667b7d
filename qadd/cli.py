"""Command-line interface for qadd.

Two commands share the same embedding and vector store options:

    qadd functions --file ./echoplex-pro.js --collection echoplex-pro-functions --dim 1024
    qadd docs --file ./manual.txt --collection echoplex-pro-docs --chunk 1200 --overlap 200
"""

from __future__ import annotations

import logging
import sys

import click

from . import __version__
from .config import load_config
from .indexing import index_document, index_functions

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(verbose: bool = False) -> None:
    """Attach a stderr handler to the 'qadd' logger (idempotent)."""
    root = logging.getLogger("qadd")
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    if root.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(handler)


def common_options(func):
    """Options shared by both commands."""
    options = [
        click.option("--file", "file_path", required=True, help="Input file"),
        click.option("--collection", required=True, help="Qdrant collection name"),
        click.option("--qdrant", default=None, help="Qdrant URL (default: http://localhost:6333)"),
        click.option("--ollama", default=None, help="Ollama URL (default: http://localhost:11434)"),
        click.option("--model", default=None,
                     help="Ollama embedding model (default: inke/Qwen3-Embedding-0.6B:latest)"),
        click.option("--dim", type=int, default=None, help="Vector size (default: 1024)"),
        click.option("--backend", type=click.Choice(["ollama", "sentence_transformers"]), default=None,
                     help="Embedding backend (default: ollama)"),
        click.option("--max-tokens", type=int, default=None,
                     help="Warn when an input exceeds this many tokens"),
        click.option("-v", "--verbose", is_flag=True, help="Enable debug logging"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _base_overrides(qdrant, ollama, model, dim, backend, max_tokens):
    return {
        "vector_store": {"qdrant": {"url": qdrant}},
        "embedding": {"ollama_url": ollama, "model": model, "vector_size": dim,
                      "backend": backend, "max_tokens": max_tokens},
    }


def _run(ingest, file_path, collection, overrides):
    try:
        cfg = load_config(overrides)
        summary = ingest(file_path, cfg, collection)
    except Exception as e:
        logger.error(f"{type(e).__name__}: {e}")
        raise click.ClickException(str(e)) from e
    click.echo(f"{summary.kind}: upserted {summary} into {summary.collection}")


@click.group()
@click.version_option(__version__)
def cli():
    """qadd - ingest documents and source code into Qdrant."""
    pass


@cli.command()
@common_options
@click.option("--chunk", "target_chars", type=int, default=None,
              help="Target chunk size in chars (default: 1200)")
@click.option("--overlap", "overlap_chars", type=int, default=None,
              help="Overlap in chars (default: 200)")
@click.option("--batch", "batch_size", type=int, default=None,
              help="Upsert batch size (default: 64)")
@click.option("--strategy", type=click.Choice(["paragraph", "recursive"]), default=None,
              help="Chunking strategy (default: paragraph)")
def docs(file_path, collection, qdrant, ollama, model, dim, backend, max_tokens, verbose,
         target_chars, overlap_chars, batch_size, strategy):
    """Ingest text chunks (e.g., PDF->TXT) into Qdrant."""
    configure_logging(verbose)
    overrides = _base_overrides(qdrant, ollama, model, dim, backend, max_tokens)
    overrides["chunking"] = {
        "strategy": strategy,
        "target_chars": target_chars,
        "overlap_chars": overlap_chars,
        "batch_size": batch_size,
    }
    _run(index_document, file_path, collection, overrides)


@cli.command()
@common_options
@click.option("--language", type=click.Choice(["javascript", "typescript", "tsx"]), default=None,
              help="Source language (default: from file extension)")
@click.option("--class-context", type=click.Choice(["document", "lexical"]), default=None,
              help="How methods and functions are attributed to classes (default: document)")
def functions(file_path, collection, qdrant, ollama, model, dim, backend, max_tokens, verbose,
              language, class_context):
    """Ingest JS functions/methods into Qdrant."""
    configure_logging(verbose)
    overrides = _base_overrides(qdrant, ollama, model, dim, backend, max_tokens)
    overrides["code"] = {"language": language, "class_context": class_context}
    _run(index_functions, file_path, collection, overrides)


if __name__ == "__main__":
    cli()
