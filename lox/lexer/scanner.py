"""
Lox scanner - turns source text into a flat list of tokens.

Single pass, one character of lookahead (two for the fractional part of a
number). Lexical errors go through the report callback and scanning carries on
with the next character, so callers always get a complete token list ending in
EOF.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Optional

from .tokens import (
    Token, TokenType, LiteralValue, KEYWORDS, SINGLE_CHAR_TOKENS,
    EQUAL_SUFFIXED_TOKENS
)
from .errors import (
    Diagnostic, ErrorReporter, LexerError, UNEXPECTED_CHARACTER,
    UNTERMINATED_STRING
)
from ..utils.log import get_logger

logger = get_logger(__name__)

ReportFn = Callable[[int, str], None]

_NUL = "\0"


class Scanner:
    """
    Lox lexical analyzer.

    A scanner is built for one source text and used for one scan.
    """

    def __init__(self, source: str, keywords: Mapping[str, TokenType] = KEYWORDS):
        """
        Initialize the scanner with source code.

        Args:
            source: Complete source text (a file, or one REPL line)
            keywords: Reserved spellings mapped to their token types
        """
        self.source = source
        self.keywords = keywords
        self.tokens: List[Token] = []

        self.start = 0
        self.current = 0
        self.line = 1

    def scan(self, report: ReportFn) -> List[Token]:
        """
        Scan the entire source.

        Args:
            report: Called as ``report(line, message)`` for each lexical error

        Returns:
            List of tokens ending with a single EOF token

        Calling scan again starts over from the beginning of the source.
        """
        self.tokens = []
        self.start = 0
        self.current = 0
        self.line = 1
        errors = 0

        def counting_report(line: int, message: str) -> None:
            nonlocal errors
            errors += 1
            report(line, message)

        while not self._is_at_end():
            self.start = self.current
            self._scan_token(counting_report)

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))

        logger.debug("Scanned %d tokens over %d lines (%d errors)",
                     len(self.tokens), self.line, errors)
        return self.tokens

    def _scan_token(self, report: ReportFn):
        """Recognize one lexeme starting at ``self.start``."""
        char = self._advance()

        if char in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[char])

        elif char in EQUAL_SUFFIXED_TOKENS:
            single, compound = EQUAL_SUFFIXED_TOKENS[char]
            self._add_token(compound if self._match("=") else single)

        elif char == "/":
            if self._match("/"):
                # Line comment runs up to (not including) the newline
                while self._peek() != "\n" and not self._is_at_end():
                    self._advance()
            else:
                self._add_token(TokenType.SLASH)

        elif char in (" ", "\r", "\t"):
            pass

        elif char == "\n":
            self.line += 1

        elif char == '"':
            self._string(report)

        elif _is_digit(char):
            self._number()

        elif _is_alpha(char):
            self._identifier()

        else:
            report(self.line, UNEXPECTED_CHARACTER)

    def _string(self, report: ReportFn):
        """Scan a string literal; the opening quote is already consumed."""
        while self._peek() != '"' and not self._is_at_end():
            if self._peek() == "\n":
                self.line += 1
            self._advance()

        if self._is_at_end():
            report(self.line, UNTERMINATED_STRING)
            return

        self._advance()  # closing quote

        # No escape sequences: the literal is the raw text between the quotes
        value = self.source[self.start + 1:self.current - 1]
        self._add_token(TokenType.STRING, value)

    def _number(self):
        """Scan an integer or decimal number literal."""
        while _is_digit(self._peek()):
            self._advance()

        # A trailing '.' without a digit after it is left for the next token
        if self._peek() == "." and _is_digit(self._peek_next()):
            self._advance()
            while _is_digit(self._peek()):
                self._advance()

        self._add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def _identifier(self):
        """Scan an identifier or reserved word."""
        while _is_alphanumeric(self._peek()):
            self._advance()

        text = self.source[self.start:self.current]
        self._add_token(self.keywords.get(text, TokenType.IDENTIFIER))

    def _add_token(self, token_type: TokenType, literal: LiteralValue = None):
        text = self.source[self.start:self.current]
        self.tokens.append(Token(token_type, text, literal, self.line))

    def _is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def _advance(self) -> str:
        """Consume and return the next character."""
        self.current += 1
        return self.source[self.current - 1]

    def _match(self, expected: str) -> bool:
        """Consume the next character only if it is ``expected``."""
        if self._is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def _peek(self) -> str:
        if self._is_at_end():
            return _NUL
        return self.source[self.current]

    def _peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return _NUL
        return self.source[self.current + 1]


# Character classes are ASCII only; str.isdigit/isalpha would accept Unicode.

def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_alpha(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_"


def _is_alphanumeric(char: str) -> bool:
    return _is_alpha(char) or _is_digit(char)


@dataclass
class ScanResult:
    """Tokens from one scan together with the diagnostics reported during it."""
    tokens: List[Token]
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def had_error(self) -> bool:
        return any(d.severity == "error" for d in self.diagnostics)

    def raise_for_errors(self) -> None:
        """Raise the first reported error as a ``LexerError``."""
        for diagnostic in self.diagnostics:
            if diagnostic.severity == "error":
                raise LexerError(diagnostic)


def tokenize_string(
    source: str,
    keywords: Mapping[str, TokenType] = KEYWORDS,
    reporter: Optional[ErrorReporter] = None,
    strict: bool = False,
) -> ScanResult:
    """
    Convenience function to scan a source string.

    Args:
        source: Source text
        keywords: Reserved word table
        reporter: Collector to report into; a fresh one is made if omitted
        strict: Raise the first lexical error instead of returning it

    Returns:
        ScanResult with the tokens and this scan's diagnostics

    Raises:
        LexerError: If ``strict`` and the source has lexical errors
    """
    if reporter is None:
        reporter = ErrorReporter()
    already_reported = len(reporter.diagnostics)

    tokens = Scanner(source, keywords).scan(reporter)
    result = ScanResult(tokens, list(reporter.diagnostics[already_reported:]))

    if strict:
        result.raise_for_errors()
    return result


def tokenize_file(
    filepath: str,
    keywords: Mapping[str, TokenType] = KEYWORDS,
    reporter: Optional[ErrorReporter] = None,
    strict: bool = False,
) -> ScanResult:
    """
    Convenience function to scan a source file.

    Raises:
        LexerError: If ``strict`` and the file has lexical errors
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    # newline="" keeps "\r\n" intact so lexemes match the file byte for byte
    with open(filepath, "r", encoding="utf-8", newline="") as f:
        source = f.read()

    return tokenize_string(source, keywords, reporter, strict)
