from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TextRange:
    """
    Half-open range [start, end) of character offsets into a document.

    Invariant:
    - 0 <= start <= end

    Indexing mirrors the `[start, end]` pair used by rule authors:
    `range[0]` is the start offset and `range[1]` the end offset.
    """

    _start: int
    _end: int

    def __post_init__(self):
        if self._start < 0 or self._end < 0:
            raise ValueError("TextRange positions cannot be negative")
        if self._start > self._end:
            raise ValueError("TextRange invariant violated: start > end")

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    def __getitem__(self, index: int) -> int:
        return self.as_tuple()[index]

    def as_tuple(self) -> tuple[int, int]:
        """Get the range as a tuple of (start, end) integers."""
        return (self._start, self._end)

    def widen(self, before: int = 0, after: int = 0) -> "TextRange":
        """Grow the range by `before`/`after` characters.

        The start is clamped at zero and the end never moves before the
        start, so negative counts shrink the range down to empty. The end is
        left for the slice to clamp against the text length.
        """
        start = max(self._start - before, 0)
        return TextRange(start, max(self._end + after, start))

    def __repr__(self) -> str:
        return f"TextRange({self._start}, {self._end})"
