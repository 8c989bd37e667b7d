"""qadd - segment documents and source code for embedding into Qdrant."""

__version__ = "0.1.0"
