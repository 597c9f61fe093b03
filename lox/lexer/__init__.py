"""
Lox Lexer Package

Implements the lexical analyzer (scanner) for the Lox scripting language.

Key Features:
- Single-pass scanning with one/two-character operator disambiguation
- String and number literal decoding
- Exact, case-sensitive keyword recognition
- Non-fatal error reporting through a callback
- Line tracking for every token
"""

from .tokens import Token, TokenType, KEYWORDS
from .scanner import Scanner, ScanResult, tokenize_string, tokenize_file
from .errors import Diagnostic, ErrorReporter, LexerError

__all__ = [
    "Scanner",
    "ScanResult",
    "Token",
    "TokenType",
    "KEYWORDS",
    "Diagnostic",
    "ErrorReporter",
    "LexerError",
    "tokenize_string",
    "tokenize_file",
]
