"""Process-scoped memo of the last successful resolution."""

from asset_resolver.resolution_result import ResolutionResult


class ResolutionMemo:
    """Holds one resolution result for the lifetime of the process.

    It starts empty, is filled by the first successful resolution and is only
    emptied by process exit or an explicit clear().
    """

    def __init__(self) -> None:
        """Create an empty memo."""
        self._result: ResolutionResult | None = None

    def get(self) -> ResolutionResult | None:
        """Return the memoized result, if any."""
        return self._result

    def set(self, result: ResolutionResult) -> None:
        """Store the result of a successful resolution."""
        self._result = result

    def clear(self) -> None:
        """Forget the memoized result."""
        self._result = None


PROCESS_MEMO = ResolutionMemo()
