"""Parsing module for the MySQL dump dialect."""

from sqldump_tsv.parsing.sql_lexer import SqlLexer, unquote_string
from sqldump_tsv.parsing.sql_parser import SqlParser

__all__ = [
    "SqlLexer",
    "SqlParser",
    "unquote_string",
]
