"""Error types for the retrieval pipeline."""


class MeowError(Exception):
    """Base error for meow operations."""

    pass


class EmbeddingError(MeowError):
    """Embedding backend call failed or returned no usable vector."""

    pass


class StorageError(MeowError):
    """Vector store could not be read or written."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class DecisionError(MeowError):
    """Decision backend gave no usable answer.

    Never escapes the ambiguity resolver; it degrades to "no confident pick".
    """

    pass
