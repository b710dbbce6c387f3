"""Parser for the statements found in a mysqldump file.

Only CREATE TABLE and INSERT ... VALUES are parsed into structure. Any other
statement is accepted as a balanced run of tokens and reported as an
OtherStatement so the caller can skip it.
"""

from __future__ import annotations

from typing import Any

import ply.yacc as yacc

from sqldump_tsv.parsing.sql_lexer import SqlLexer
from sqldump_tsv.statements import (
    CreateTable,
    Insert,
    NegativeNumberLiteral,
    NullLiteral,
    NumberLiteral,
    OtherStatement,
    QuotedStringLiteral,
    Statement,
    UnsupportedExpression,
    Value,
)


def expression_text(value: Value) -> str:
    """Return SQL-ish source text for a parsed value, for error messages."""
    if isinstance(value, NumberLiteral):
        return value.text
    if isinstance(value, NegativeNumberLiteral):
        return f"-{value.text}"
    if isinstance(value, QuotedStringLiteral):
        return "'" + value.text.replace("\\", "\\\\").replace("'", "\\'") + "'"
    if isinstance(value, NullLiteral):
        return "NULL"
    return value.text


class SqlParser:
    """Parser for mysqldump statements."""

    tokens = SqlLexer.tokens

    # Operator precedence (value expressions only)
    precedence = (
        ("left", "OP"),
        ("left", "PLUS", "MINUS"),
        ("right", "UMINUS"),
    )

    def __init__(self) -> None:
        self.lexer = SqlLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_statement(self, p: yacc.YaccProduction) -> None:
        """statement : create_table
                     | insert
                     | other_statement"""
        p[0] = p[1]

    # --- CREATE TABLE ---

    def p_create_table(self, p: yacc.YaccProduction) -> None:
        """create_table : CREATE opt_temporary TABLE opt_if_not_exists table_name LPAREN table_element_list RPAREN table_options"""
        columns = [name for name in p[7] if name is not None]
        p[0] = CreateTable(name=p[5], columns=columns)

    def p_opt_temporary(self, p: yacc.YaccProduction) -> None:
        """opt_temporary : TEMPORARY
                         | empty"""
        p[0] = p[1] is not None

    def p_opt_if_not_exists(self, p: yacc.YaccProduction) -> None:
        """opt_if_not_exists : IF NOT EXISTS
                             | empty"""
        p[0] = len(p) > 2

    def p_table_element_list_single(self, p: yacc.YaccProduction) -> None:
        """table_element_list : table_element"""
        p[0] = [p[1]]

    def p_table_element_list_multiple(self, p: yacc.YaccProduction) -> None:
        """table_element_list : table_element_list COMMA table_element"""
        p[0] = p[1] + [p[3]]

    def p_table_element_column(self, p: yacc.YaccProduction) -> None:
        """table_element : identifier token_run"""
        p[0] = p[1]

    def p_table_element_constraint(self, p: yacc.YaccProduction) -> None:
        """table_element : PRIMARY token_run
                         | KEY token_run
                         | UNIQUE token_run
                         | INDEX token_run
                         | CONSTRAINT token_run
                         | FOREIGN token_run
                         | FULLTEXT token_run
                         | SPATIAL token_run
                         | CHECK token_run"""
        p[0] = None

    def p_table_options(self, p: yacc.YaccProduction) -> None:
        """table_options : token_group"""
        p[0] = p[1]

    # --- INSERT ---

    def p_insert(self, p: yacc.YaccProduction) -> None:
        """insert : INSERT opt_ignore opt_into table_name opt_column_list values_keyword row_list"""
        p[0] = Insert(table_name=p[4], rows=p[7], columns=p[5])

    def p_opt_ignore(self, p: yacc.YaccProduction) -> None:
        """opt_ignore : IGNORE
                      | empty"""
        p[0] = p[1] is not None

    def p_opt_into(self, p: yacc.YaccProduction) -> None:
        """opt_into : INTO
                    | empty"""
        p[0] = p[1]

    def p_opt_column_list(self, p: yacc.YaccProduction) -> None:
        """opt_column_list : LPAREN identifier_list RPAREN
                           | LPAREN RPAREN
                           | empty"""
        if len(p) == 4:
            p[0] = p[2]
        elif len(p) == 3:
            p[0] = []
        else:
            p[0] = None

    def p_identifier_list_single(self, p: yacc.YaccProduction) -> None:
        """identifier_list : identifier"""
        p[0] = [p[1]]

    def p_identifier_list_multiple(self, p: yacc.YaccProduction) -> None:
        """identifier_list : identifier_list COMMA identifier"""
        p[0] = p[1] + [p[3]]

    def p_values_keyword(self, p: yacc.YaccProduction) -> None:
        """values_keyword : VALUES
                          | VALUE"""
        p[0] = p[1]

    def p_row_list_single(self, p: yacc.YaccProduction) -> None:
        """row_list : row"""
        p[0] = [p[1]]

    def p_row_list_multiple(self, p: yacc.YaccProduction) -> None:
        """row_list : row_list COMMA row"""
        p[1].append(p[3])
        p[0] = p[1]

    def p_row(self, p: yacc.YaccProduction) -> None:
        """row : LPAREN expression_list RPAREN"""
        p[0] = p[2]

    def p_row_empty(self, p: yacc.YaccProduction) -> None:
        """row : LPAREN RPAREN"""
        p[0] = []

    def p_expression_list_single(self, p: yacc.YaccProduction) -> None:
        """expression_list : expression"""
        p[0] = [p[1]]

    def p_expression_list_multiple(self, p: yacc.YaccProduction) -> None:
        """expression_list : expression_list COMMA expression"""
        p[1].append(p[3])
        p[0] = p[1]

    # --- Value expressions ---

    def p_expression_number(self, p: yacc.YaccProduction) -> None:
        """expression : NUMBER"""
        p[0] = NumberLiteral(p[1])

    def p_expression_string(self, p: yacc.YaccProduction) -> None:
        """expression : STRING"""
        p[0] = QuotedStringLiteral(p[1])

    def p_expression_null(self, p: yacc.YaccProduction) -> None:
        """expression : NULL"""
        p[0] = NullLiteral()

    def p_expression_hex(self, p: yacc.YaccProduction) -> None:
        """expression : HEXNUM"""
        p[0] = UnsupportedExpression("hex literal", p[1])

    def p_expression_identifier(self, p: yacc.YaccProduction) -> None:
        """expression : identifier"""
        p[0] = UnsupportedExpression("identifier", p[1])

    def p_expression_introducer(self, p: yacc.YaccProduction) -> None:
        """expression : identifier STRING"""
        # Charset introducer such as _binary 'abc'
        text = expression_text(QuotedStringLiteral(p[2]))
        p[0] = UnsupportedExpression("introducer", f"{p[1]} {text}")

    def p_expression_call(self, p: yacc.YaccProduction) -> None:
        """expression : identifier LPAREN expression_list RPAREN
                      | identifier LPAREN RPAREN"""
        args = p[3] if len(p) == 5 else []
        text = ", ".join(expression_text(arg) for arg in args)
        p[0] = UnsupportedExpression("function call", f"{p[1]}({text})")

    def p_expression_nested(self, p: yacc.YaccProduction) -> None:
        """expression : LPAREN expression RPAREN"""
        p[0] = UnsupportedExpression("nested expression", f"({expression_text(p[2])})")

    def p_expression_minus(self, p: yacc.YaccProduction) -> None:
        """expression : MINUS expression %prec UMINUS"""
        operand = p[2]
        if isinstance(operand, NumberLiteral):
            p[0] = NegativeNumberLiteral(operand.text)
        else:
            p[0] = UnsupportedExpression("unary minus", f"-{expression_text(operand)}")

    def p_expression_plus(self, p: yacc.YaccProduction) -> None:
        """expression : PLUS expression %prec UMINUS"""
        p[0] = UnsupportedExpression("unary plus", f"+{expression_text(p[2])}")

    def p_expression_binary(self, p: yacc.YaccProduction) -> None:
        """expression : expression PLUS expression
                      | expression MINUS expression
                      | expression OP expression"""
        text = f"{expression_text(p[1])} {p[2]} {expression_text(p[3])}"
        p[0] = UnsupportedExpression("binary expression", text)

    # --- Other statements ---

    def p_other_statement(self, p: yacc.YaccProduction) -> None:
        """other_statement : head_token token_group
                           | TABLE token_group
                           | TEMPORARY token_group"""
        p[0] = OtherStatement(keyword=p[1].upper())

    def p_other_statement_create(self, p: yacc.YaccProduction) -> None:
        """other_statement : CREATE head_token token_group"""
        p[0] = OtherStatement(keyword=f"CREATE {p[2].upper()}")

    def p_other_statement_parenthesized(self, p: yacc.YaccProduction) -> None:
        """other_statement : LPAREN token_group RPAREN token_group"""
        p[0] = OtherStatement(keyword="(")

    def p_head_token(self, p: yacc.YaccProduction) -> None:
        """head_token : IDENTIFIER
                      | NUMBER
                      | STRING
                      | HEXNUM
                      | DOT
                      | MINUS
                      | PLUS
                      | OP
                      | COMMA
                      | IF
                      | NOT
                      | EXISTS
                      | IGNORE
                      | INTO
                      | VALUES
                      | VALUE
                      | NULL
                      | PRIMARY
                      | KEY
                      | UNIQUE
                      | INDEX
                      | CONSTRAINT
                      | FOREIGN
                      | FULLTEXT
                      | SPATIAL
                      | CHECK"""
        p[0] = p[1]

    # --- Generic token runs ---

    def p_token_run(self, p: yacc.YaccProduction) -> None:
        """token_run : token_run run_item
                     | empty"""
        p[0] = None

    def p_run_item(self, p: yacc.YaccProduction) -> None:
        """run_item : plain_token
                    | LPAREN token_group RPAREN"""
        p[0] = None

    def p_token_group(self, p: yacc.YaccProduction) -> None:
        """token_group : token_group group_item
                       | empty"""
        p[0] = None

    def p_group_item(self, p: yacc.YaccProduction) -> None:
        """group_item : plain_token
                      | COMMA
                      | LPAREN token_group RPAREN"""
        p[0] = None

    def p_plain_token(self, p: yacc.YaccProduction) -> None:
        """plain_token : IDENTIFIER
                       | NUMBER
                       | STRING
                       | HEXNUM
                       | DOT
                       | MINUS
                       | PLUS
                       | OP
                       | CREATE
                       | TABLE
                       | TEMPORARY
                       | IF
                       | NOT
                       | EXISTS
                       | INSERT
                       | IGNORE
                       | INTO
                       | VALUES
                       | VALUE
                       | NULL
                       | PRIMARY
                       | KEY
                       | UNIQUE
                       | INDEX
                       | CONSTRAINT
                       | FOREIGN
                       | FULLTEXT
                       | SPATIAL
                       | CHECK"""
        p[0] = p[1]

    # --- Names ---

    def p_table_name(self, p: yacc.YaccProduction) -> None:
        """table_name : identifier
                      | identifier DOT identifier"""
        # db.table resolves to the table part
        p[0] = p[len(p) - 1]

    def p_identifier(self, p: yacc.YaccProduction) -> None:
        """identifier : IDENTIFIER"""
        p[0] = p[1]

    def p_empty(self, p: yacc.YaccProduction) -> None:
        """empty :"""
        p[0] = None

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at {p.value!r} (line {p.lineno})")
        else:
            raise SyntaxError("Syntax error at end of statement")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, start="statement", **kwargs)

    def parse(self, data: str, line: int = 1) -> Statement:
        """Parse one statement (without its terminating semicolon)."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        self.lexer.input(data, line)
        return self.parser.parse(lexer=self.lexer.lexer)
