from contextlib import contextmanager
from typing import Iterator, List, Optional

from ..exceptions import ConversionError


class PythonConversionState:
    """Run state for converting Python declarations to IDL."""

    def __init__(self, namespace: Optional[str] = None):
        self.namespace = namespace
        self._classes_in_progress: List[type] = []

    @contextmanager
    def converting_class(self, cls: type) -> Iterator[None]:
        """Marks ``cls`` as being converted, rejecting self-referential declarations."""
        if cls in self._classes_in_progress:
            chain = " -> ".join(c.__qualname__ for c in [*self._classes_in_progress, cls])
            raise ConversionError(f"Circular reference detected: {chain}. Self-referential types are not supported.")
        self._classes_in_progress.append(cls)
        try:
            yield
        finally:
            self._classes_in_progress.pop()
