from contextlib import contextmanager
from typing import Iterator


class JsonPathState:
    """Run state tracking the dot delimited path of the property being converted."""

    def __init__(self) -> None:
        self.json_path = ""

    @contextmanager
    def push_path(self, name: str) -> Iterator[str]:
        """Extends the path with ``name`` for the duration of the block, then restores it."""
        previous = self.json_path
        self.json_path = f"{previous}.{name}" if previous else name
        try:
            yield self.json_path
        finally:
            self.json_path = previous

    def qualify(self, root: str) -> str:
        """``root`` followed by the current path, e.g. ``entity.address.street``."""
        return f"{root}.{self.json_path}" if self.json_path else root
