"""
Lox Toolchain Package

Front end of a small scripting-language toolchain. Currently provides the
scanner that converts source text into a flat token stream for downstream
parsing.

Architecture:
    lox/
    ├── lexer/           # Tokens, scanner and lexical diagnostics
    ├── utils/           # Logging setup
    └── cli.py           # File / prompt driver
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Scanner, Token, TokenType, KEYWORDS, ErrorReporter

__all__ = [
    # Core classes
    "Scanner",
    "Token",
    "TokenType",
    "KEYWORDS",
    "ErrorReporter",

    # Version info
    "__version__",
    "__license__",
]
