"""ELiTE: exam question answering via hosted AI providers."""

__version__ = "0.1.0"
