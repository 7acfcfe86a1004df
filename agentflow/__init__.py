"""Agent runner, state graphs, chains, in-memory retrieval and RAG, model registry and observers."""

__version__ = "0.1.0"