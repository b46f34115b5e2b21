"""Interface for diagnostic output.

Core components record what they do through an injected sink instead of
writing to a process-wide logger, so the embedding application decides
where (and whether) diagnostics go.
"""

import abc


class DiagnosticSink(abc.ABC):
    """Abstract Base Class receiving diagnostic records from the core."""

    @abc.abstractmethod
    def record(self, level: int, message: str) -> None:
        """Records a single diagnostic message.

        Args:
            level: Severity, using the standard `logging` level numbers.
            message: Human-readable message. Never contains secrets.
        """
        pass


class NullDiagnosticSink(DiagnosticSink):
    """Discards every record. Default for core components."""

    def record(self, level: int, message: str) -> None:
        pass
