"""Tests for the SQL lexer and parser."""

import pytest

from sqldump_tsv.parsing import SqlParser, unquote_string
from sqldump_tsv.parsing.sql_lexer import SqlLexer
from sqldump_tsv.statements import (
    CreateTable,
    Insert,
    NegativeNumberLiteral,
    NullLiteral,
    NumberLiteral,
    OtherStatement,
    QuotedStringLiteral,
    UnsupportedExpression,
)


class TestSqlLexer:
    """Tests for the SQL lexer."""

    def test_tokenize_create_table(self):
        """Test tokenizing the start of a CREATE TABLE."""
        lexer = SqlLexer()
        lexer.build()

        tokens = lexer.tokenize("CREATE TABLE `t` (`id` int)")
        token_types = [t.type for t in tokens]

        assert token_types == [
            "CREATE",
            "TABLE",
            "IDENTIFIER",
            "LPAREN",
            "IDENTIFIER",
            "IDENTIFIER",
            "RPAREN",
        ]

    def test_keywords_case_insensitive(self):
        """Test that keywords match regardless of case."""
        lexer = SqlLexer()
        lexer.build()

        tokens = lexer.tokenize("insert Into t vAlUeS")
        token_types = [t.type for t in tokens]

        assert token_types == ["INSERT", "INTO", "IDENTIFIER", "VALUES"]

    def test_backtick_keyword_is_identifier(self):
        """Test that a backticked keyword is an identifier."""
        lexer = SqlLexer()
        lexer.build()

        tokens = lexer.tokenize("`table` `a``b`")

        assert [t.type for t in tokens] == ["IDENTIFIER", "IDENTIFIER"]
        assert [t.value for t in tokens] == ["table", "a`b"]

    def test_numbers_keep_raw_text(self):
        """Test that numbers are not reformatted."""
        lexer = SqlLexer()
        lexer.build()

        tokens = lexer.tokenize("3.140 1e5 .5 007")

        assert [t.type for t in tokens] == ["NUMBER"] * 4
        assert [t.value for t in tokens] == ["3.140", "1e5", ".5", "007"]

    def test_strings_are_decoded(self):
        """Test that string tokens have quotes stripped and escapes decoded."""
        lexer = SqlLexer()
        lexer.build()

        tokens = lexer.tokenize(r"'it''s' 'a\tb' " + '"dq"')

        assert [t.type for t in tokens] == ["STRING", "STRING", "STRING"]
        assert [t.value for t in tokens] == ["it's", "a\tb", "dq"]

    def test_comments_ignored(self):
        """Test that block, conditional, dash and hash comments are skipped."""
        lexer = SqlLexer()
        lexer.build()

        tokens = lexer.tokenize("/*!40101 SET NAMES utf8 */ -- note\n# hash\nNULL")

        assert [t.type for t in tokens] == ["NULL"]

    def test_minus_is_not_a_comment(self):
        """Test that a minus sign before a number is a MINUS token."""
        lexer = SqlLexer()
        lexer.build()

        assert [t.type for t in lexer.tokenize("-5")] == ["MINUS", "NUMBER"]
        assert [t.type for t in lexer.tokenize("--5")] == ["MINUS", "MINUS", "NUMBER"]

    def test_hex_literals(self):
        """Test hex and bit literals."""
        lexer = SqlLexer()
        lexer.build()

        tokens = lexer.tokenize("0xFF X'0a' b'101'")

        assert [t.type for t in tokens] == ["HEXNUM", "HEXNUM", "HEXNUM"]

    def test_line_numbers(self):
        """Test that tokens carry line numbers, including across strings."""
        lexer = SqlLexer()
        lexer.build()

        tokens = lexer.tokenize("a\n'x\ny'\nb")

        assert [t.lineno for t in tokens] == [1, 2, 4]

    def test_unterminated_string(self):
        """Test error on an unterminated string."""
        lexer = SqlLexer()
        lexer.build()

        with pytest.raises(SyntaxError):
            lexer.tokenize("'abc")

    def test_illegal_character(self):
        """Test error on illegal character."""
        lexer = SqlLexer()
        lexer.build()

        with pytest.raises(SyntaxError):
            lexer.tokenize("$x")


class TestUnquoteString:
    """Tests for MySQL string escape decoding."""

    def test_backslash_escapes(self):
        """Test the standard backslash escapes."""
        assert unquote_string(r"'a\nb\tc\rd'") == "a\nb\tc\rd"
        assert unquote_string(r"'\0\Z\b'") == "\0\x1a\b"
        assert unquote_string(r"'\\ \' \"'") == "\\ ' \""

    def test_like_escapes_keep_backslash(self):
        """Test that \\% and \\_ keep their backslash."""
        assert unquote_string(r"'50\% a\_b'") == "50\\% a\\_b"

    def test_unknown_escape_drops_backslash(self):
        """Test that an unknown escape stands for the character itself."""
        assert unquote_string(r"'\q'") == "q"

    def test_doubled_quotes(self):
        """Test doubled quotes in both quote styles."""
        assert unquote_string("'it''s'") == "it's"
        assert unquote_string('"say ""hi"""') == 'say "hi"'
        assert unquote_string("'say \"\"hi\"\"'") == 'say ""hi""'


class TestSqlParser:
    """Tests for the SQL parser."""

    def test_parse_create_table(self):
        """Test parsing a mysqldump CREATE TABLE."""
        parser = SqlParser()
        stmt = parser.parse("""CREATE TABLE `Competitions` (
  `id` varchar(32) NOT NULL DEFAULT '',
  `name` varchar(50) NOT NULL,
  `latitude` int(11) DEFAULT NULL,
  `price` decimal(10,2) DEFAULT NULL COMMENT 'in euros',
  `kind` enum('a','b') NOT NULL,
  PRIMARY KEY (`id`),
  KEY `idx_name` (`name`),
  UNIQUE KEY `u` (`kind`,`name`),
  CONSTRAINT `fk` FOREIGN KEY (`id`) REFERENCES `Other` (`id`) ON DELETE CASCADE
) ENGINE=InnoDB AUTO_INCREMENT=5 DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci""")

        assert isinstance(stmt, CreateTable)
        assert stmt.name == "Competitions"
        assert stmt.columns == ["id", "name", "latitude", "price", "kind"]

    def test_parse_create_table_if_not_exists(self):
        """Test CREATE TEMPORARY TABLE IF NOT EXISTS."""
        parser = SqlParser()
        stmt = parser.parse("create temporary table if not exists t (a int, b text)")

        assert stmt == CreateTable(name="t", columns=["a", "b"])

    def test_parse_qualified_table_name(self):
        """Test that db.table resolves to the table part."""
        parser = SqlParser()
        stmt = parser.parse("CREATE TABLE `db`.`t` (`a` int)")

        assert stmt.name == "t"

    def test_parse_insert(self):
        """Test parsing a multi-row INSERT."""
        parser = SqlParser()
        stmt = parser.parse("INSERT INTO `t` VALUES (1,'a',NULL,-2.5),(2,'b',3,4)")

        assert isinstance(stmt, Insert)
        assert stmt.table_name == "t"
        assert stmt.columns is None
        assert stmt.rows == [
            [NumberLiteral("1"), QuotedStringLiteral("a"), NullLiteral(), NegativeNumberLiteral("2.5")],
            [NumberLiteral("2"), QuotedStringLiteral("b"), NumberLiteral("3"), NumberLiteral("4")],
        ]

    def test_parse_insert_variants(self):
        """Test INSERT IGNORE, a column list, VALUE and a missing INTO."""
        parser = SqlParser()

        stmt = parser.parse("INSERT IGNORE INTO t (`a`, `b`) VALUE (1, 2)")
        assert stmt.table_name == "t"
        assert stmt.columns == ["a", "b"]
        assert stmt.rows == [[NumberLiteral("1"), NumberLiteral("2")]]

        stmt = parser.parse("insert t values ()")
        assert stmt.table_name == "t"
        assert stmt.rows == [[]]

    def test_parse_string_escapes(self):
        """Test that string values arrive decoded."""
        parser = SqlParser()
        stmt = parser.parse(r"INSERT INTO t VALUES ('a\tb\nc','it\'s')")

        assert stmt.rows == [[QuotedStringLiteral("a\tb\nc"), QuotedStringLiteral("it's")]]

    def test_parse_unsupported_expressions(self):
        """Test that non-literal values parse as UnsupportedExpression."""
        parser = SqlParser()
        stmt = parser.parse(
            "INSERT INTO t VALUES (0xFF, NOW(), _binary 'x', -'a', +1, 1+2, (3), TRUE)"
        )

        row = stmt.rows[0]
        assert all(isinstance(value, UnsupportedExpression) for value in row)
        assert [value.kind for value in row] == [
            "hex literal",
            "function call",
            "introducer",
            "unary minus",
            "unary plus",
            "binary expression",
            "nested expression",
            "identifier",
        ]
        assert row[1].text == "NOW()"
        assert row[5].text == "1 + 2"

    def test_parse_other_statements(self):
        """Test that other statements become OtherStatement."""
        parser = SqlParser()

        assert parser.parse("DROP TABLE IF EXISTS `t`") == OtherStatement("DROP")
        assert parser.parse("LOCK TABLES `t` WRITE") == OtherStatement("LOCK")
        assert parser.parse("UNLOCK TABLES") == OtherStatement("UNLOCK")
        assert parser.parse("SET @saved = @@character_set_client") == OtherStatement("SET")
        assert parser.parse("USE `wca`") == OtherStatement("USE")
        assert parser.parse("CREATE DATABASE `wca`") == OtherStatement("CREATE DATABASE")

    def test_syntax_error_at_end(self):
        """Test error on a truncated statement."""
        parser = SqlParser()

        with pytest.raises(SyntaxError, match="end of statement"):
            parser.parse("INSERT INTO t VALUES (1")

    def test_syntax_error_reports_line(self):
        """Test that errors report the line relative to the given start."""
        parser = SqlParser()

        with pytest.raises(SyntaxError, match="line 11"):
            parser.parse("INSERT INTO t\nVALUES 5", line=10)

    def test_parser_reusable_after_error(self):
        """Test that the parser keeps working after a syntax error."""
        parser = SqlParser()

        with pytest.raises(SyntaxError):
            parser.parse("CREATE TABLE t LIKE u")

        assert parser.parse("CREATE TABLE t (a int)") == CreateTable("t", ["a"])
