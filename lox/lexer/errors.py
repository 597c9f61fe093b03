"""
Error handling for the Lox scanner.

Lexical errors never abort a scan. The scanner reports them through a
``report(line, message)`` callback; ``ErrorReporter`` is the standard
callback, collecting one ``Diagnostic`` per report so the driver can decide
afterwards what "had an error" means for the whole run.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from ..utils.log import get_logger

logger = get_logger(__name__)


UNEXPECTED_CHARACTER = "Unexpected character."
UNTERMINATED_STRING = "Unterminated string."

# Common error codes for categorization
ERROR_CODES = {
    "L001": UNEXPECTED_CHARACTER,
    "L002": UNTERMINATED_STRING,
}

_CODES_BY_MESSAGE = {message: code for code, message in ERROR_CODES.items()}


@dataclass(frozen=True)
class Diagnostic:
    """A single problem found while scanning."""
    message: str
    line: int
    severity: str = "error"
    code: Optional[str] = None

    def __str__(self) -> str:
        return f"[line {self.line}] {self.severity.capitalize()}: {self.message}"


class LexerError(Exception):
    """
    Exception carrying a lexical diagnostic.

    The scanner itself never raises this; it is raised by the strict helpers
    for callers that want the first error as an exception.
    """

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic

    @property
    def line(self) -> int:
        return self.diagnostic.line

    def __str__(self) -> str:
        return str(self.diagnostic)


class ErrorReporter:
    """
    Collects lexical errors reported during a scan.

    Instances are callable with the ``(line, message)`` shape the scanner
    expects. Every report is recorded, logged, and forwarded to ``sink`` when
    one is given.
    """

    def __init__(self, sink: Optional[Callable[[str], None]] = None):
        self.sink = sink
        self.diagnostics: List[Diagnostic] = []

    def __call__(self, line: int, message: str) -> None:
        diagnostic = Diagnostic(
            message=message,
            line=line,
            code=_CODES_BY_MESSAGE.get(message),
        )
        self.diagnostics.append(diagnostic)
        logger.debug("%s", diagnostic)

        if self.sink is not None:
            self.sink(str(diagnostic))

    @property
    def had_error(self) -> bool:
        """Check if any error was reported."""
        return any(d.severity == "error" for d in self.diagnostics)

    def reset(self) -> None:
        """Forget everything reported so far."""
        self.diagnostics.clear()
