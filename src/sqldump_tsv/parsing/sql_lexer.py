"""Lexer for the MySQL dump dialect."""

import re

import ply.lex as lex


# Backslash escapes recognised inside quoted strings. \% and \_ keep their
# backslash; any other escaped character stands for itself.
_BACKSLASH_ESCAPES = {
    "0": "\0",
    "b": "\b",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "Z": "\x1a",
    "%": "\\%",
    "_": "\\_",
}

_ESCAPE_PATTERNS = {
    "'": re.compile(r"\\([\s\S])|''"),
    '"': re.compile(r'\\([\s\S])|""'),
}


def unquote_string(literal: str) -> str:
    """Strip the quotes from a string literal and decode its escapes."""
    quote = literal[0]

    def replace(match: re.Match[str]) -> str:
        escaped = match.group(1)
        if escaped is None:
            return quote
        return _BACKSLASH_ESCAPES.get(escaped, escaped)

    return _ESCAPE_PATTERNS[quote].sub(replace, literal[1:-1])


class SqlLexer:
    """Lexer for tokenizing the statements found in a mysqldump file."""

    # Reserved keywords (matched case-insensitively)
    reserved = {
        "create": "CREATE",
        "table": "TABLE",
        "temporary": "TEMPORARY",
        "if": "IF",
        "not": "NOT",
        "exists": "EXISTS",
        "insert": "INSERT",
        "ignore": "IGNORE",
        "into": "INTO",
        "values": "VALUES",
        "value": "VALUE",
        "null": "NULL",
        "primary": "PRIMARY",
        "key": "KEY",
        "unique": "UNIQUE",
        "index": "INDEX",
        "constraint": "CONSTRAINT",
        "foreign": "FOREIGN",
        "fulltext": "FULLTEXT",
        "spatial": "SPATIAL",
        "check": "CHECK",
    }

    # Token list
    tokens = [
        "IDENTIFIER",
        "NUMBER",
        "STRING",
        "HEXNUM",
        "LPAREN",
        "RPAREN",
        "COMMA",
        "DOT",
        "MINUS",
        "PLUS",
        "OP",
    ] + list(reserved.values())

    # Simple tokens
    t_LPAREN = r"\("
    t_RPAREN = r"\)"
    t_COMMA = r","
    t_DOT = r"\."
    t_MINUS = r"-"
    t_PLUS = r"\+"
    t_OP = r"[*/<>=!@:%|&^~?{}\[\]\\]"

    # Newlines are handled by t_NEWLINE for line counting
    t_ignore = " \t\r\f"

    def __init__(self) -> None:
        self.lexer: lex.LexToken = None  # type: ignore

    # Function rules are tried in definition order, so comments come before
    # MINUS/OP and numbers come before DOT.

    def t_BLOCK_COMMENT(self, t: lex.LexToken) -> None:
        r"/\*[\s\S]*?\*/"
        # Includes MySQL /*!NNNNN ... */ conditional comments
        t.lexer.lineno += t.value.count("\n")

    def t_LINE_COMMENT(self, t: lex.LexToken) -> None:
        r"(?:--(?=\s|$)|\#)[^\n]*"
        pass

    def t_NEWLINE(self, t: lex.LexToken) -> None:
        r"\n+"
        t.lexer.lineno += len(t.value)

    def t_HEXNUM(self, t: lex.LexToken) -> lex.LexToken:
        r"0x[0-9a-fA-F]+|[xX]'[0-9a-fA-F]*'|0b[01]+|[bB]'[01]*'"
        return t

    def t_NUMBER(self, t: lex.LexToken) -> lex.LexToken:
        r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"
        # Kept as text so digits and precision survive unchanged
        return t

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r"""'(?:[^'\\]|\\[\s\S]|'')*'|"(?:[^"\\]|\\[\s\S]|"")*\""""
        t.lexer.lineno += t.value.count("\n")
        t.value = unquote_string(t.value)
        return t

    def t_BACKTICK_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"`(?:[^`]|``)*`"
        # Always an IDENTIFIER, never a keyword
        t.lexer.lineno += t.value.count("\n")
        t.value = t.value[1:-1].replace("``", "`")
        t.type = "IDENTIFIER"
        return t

    def t_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"[^\W\d][\w$]*"
        t.type = self.reserved.get(t.value.lower(), "IDENTIFIER")
        return t

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Illegal character {t.value[0]!r} at line {t.lineno}")

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str, line: int = 1) -> None:
        """Set the input string to tokenize, numbering lines from line."""
        self.lexer.lineno = line
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
