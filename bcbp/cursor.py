"""Position tracking over BCBP text."""

# Project imports
from bcbp.errors import InsufficientData

class Cursor():
    """Reads fixed-length chunks from a BCBP string."""

    def __init__(self, data: str):
        self.data: str = data
        self.position: int = 0

    def __repr__(self):
        return f"Cursor({self.position}/{len(self.data)})"

    def take(self, length: int, field: str | None = None) -> str:
        """Returns the next length characters and advances."""
        if length > self.remaining():
            raise InsufficientData(
                field, self.position,
                f"Expected {length} characters but only {self.remaining()} "
                "remain"
            )
        chunk = self.data[self.position:self.position + length]
        self.position += length
        return chunk

    def peek(self, length: int = 1) -> str:
        """Returns up to length characters without advancing."""
        return self.data[self.position:self.position + length]

    def remaining(self) -> int:
        """Counts unconsumed characters."""
        return len(self.data) - self.position

    def at_end(self) -> bool:
        """Checks whether every character has been consumed."""
        return self.position == len(self.data)
