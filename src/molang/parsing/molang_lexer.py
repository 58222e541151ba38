"""Lexer for Molang expressions."""

import ply.lex as lex

from molang.errors import MolangCompileError


class MolangLexer:
    """Lexer for tokenizing Molang source.

    Molang is case-insensitive, so names are lowercased here.
    """

    # Reserved keywords
    reserved = {
        "return": "RETURN",
    }

    # Token list
    tokens = [
        "NAME",
        "NUMBER",
        "PLUS",
        "MINUS",
        "TIMES",
        "DIVIDE",
        "LPAREN",
        "RPAREN",
        "LBRACKET",
        "RBRACKET",
        "COMMA",
        "SEMI",
        "ASSIGN",
        "EQ",
        "NEQ",
        "LT",
        "LE",
        "GT",
        "GE",
        "AND",
        "OR",
        "NOT",
        "QUESTION",
        "COLON",
    ] + list(reserved.values())

    # Simple tokens
    t_PLUS = r"\+"
    t_MINUS = r"-"
    t_TIMES = r"\*"
    t_DIVIDE = r"/"
    t_LPAREN = r"\("
    t_RPAREN = r"\)"
    t_LBRACKET = r"\["
    t_RBRACKET = r"\]"
    t_COMMA = r","
    t_SEMI = r";"
    t_ASSIGN = r"="
    t_EQ = r"=="
    t_NEQ = r"!="
    t_LT = r"<"
    t_LE = r"<="
    t_GT = r">"
    t_GE = r">="
    t_AND = r"&&"
    t_OR = r"\|\|"
    t_NOT = r"!"
    t_QUESTION = r"\?"
    t_COLON = r":"

    # Ignored characters
    t_ignore = " \t\r"

    def __init__(self) -> None:
        self.lexer: lex.LexToken = None  # type: ignore

    def t_NUMBER(self, t: lex.LexToken) -> lex.LexToken:
        r"(\d+\.\d*|\.\d+|\d+)[fF]?"
        t.value = float(t.value.rstrip("fF"))
        return t

    def t_NAME(self, t: lex.LexToken) -> lex.LexToken:
        r"[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)*"
        t.value = t.value.lower()
        t.type = self.reserved.get(t.value, "NAME")
        return t

    def t_NEWLINE(self, t: lex.LexToken) -> None:
        r"\n+"
        t.lexer.lineno += len(t.value)

    def t_error(self, t: lex.LexToken) -> None:
        raise MolangCompileError(
            f"Illegal character '{t.value[0]}'", t.lexer.lexdata, t.lexpos, t.lexpos + 1
        )

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
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
