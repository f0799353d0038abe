"""Test the syntax front end (lexer, parser, AST nodes)."""
import pytest
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from smartlang.errors import ParseError, ResourceExhausted, UnbalancedParens
from smartlang.syntax.lexer import Token, TokenKind, tokenize
from smartlang.syntax.nodes import (
    ListNode,
    NumberNode,
    OperatorNode,
    VariableNode,
    ast_to_dict,
    unparse,
)
from smartlang.syntax.parser import parse, parse_script


class TestLexer:
    """Tests for tokenize."""

    def test_classifies_tokens(self):
        """Test each token class."""
        tokens = tokenize("($transfer 10 alice)")
        assert [t.kind for t in tokens] == [
            TokenKind.PAREN_OPEN,
            TokenKind.SYMBOL,
            TokenKind.NUMBER,
            TokenKind.IDENTIFIER,
            TokenKind.PAREN_CLOSE,
        ]
        assert tokens[2].value == 10
        assert tokens[3].text == "alice"

    def test_parens_need_no_whitespace(self):
        """Test parentheses lex as standalone tokens."""
        texts = [t.text for t in tokenize("((+ 1 2))")]
        assert texts == ["(", "(", "+", "1", "2", ")", ")"]

    def test_strips_comments(self):
        """Test ';' comments run to end of line."""
        tokens = tokenize("(define x 1) ; (define y 2)\n; whole line\n(println x)")
        texts = [t.text for t in tokens]
        assert "y" not in texts
        assert texts == ["(", "define", "x", "1", ")", "(", "println", "x", ")"]

    def test_empty_input(self):
        """Test empty and comment-only input yields no tokens."""
        assert tokenize("") == []
        assert tokenize("   \n ; nothing here\n\t") == []

    def test_mixed_identifier_is_not_number(self):
        """Test identifiers may contain digits but not be purely numeric."""
        assert tokenize("acc1")[0].kind == TokenKind.IDENTIFIER
        assert tokenize("123")[0].kind == TokenKind.NUMBER
        assert tokenize("under_score")[0].kind == TokenKind.IDENTIFIER

    def test_operators_are_symbols(self):
        """Test arithmetic and $-prefixed keywords lex as symbols."""
        for text in ["+", "-", "*", "/", "$me", "$balance", "-5", "1.5"]:
            assert tokenize(text)[0].kind == TokenKind.SYMBOL

    def test_non_ascii_word_is_symbol(self):
        """Test character classes are ASCII only."""
        assert tokenize("café")[0].kind == TokenKind.SYMBOL

    def test_token_str(self):
        """Test Token renders as its text."""
        assert str(Token(TokenKind.IDENTIFIER, "x")) == "x"


class TestParser:
    """Tests for parse."""

    def test_parse_nested_form(self):
        """Test a nested form builds the expected tree."""
        forms = parse_script("(define f (lambda (x) (+ x 1)))")
        assert forms == [
            ListNode((
                VariableNode("define"),
                VariableNode("f"),
                ListNode((
                    VariableNode("lambda"),
                    ListNode((VariableNode("x"),)),
                    ListNode((OperatorNode("+"), VariableNode("x"), NumberNode(1))),
                )),
            ))
        ]

    def test_multiple_top_level_forms(self):
        """Test each top-level form becomes one node."""
        forms = parse_script("(define x 1)\n(println x)\n($balance $me)")
        assert len(forms) == 3
        assert [f.text for f in forms] == ["define", "println", "$balance"]

    def test_bare_atoms_at_top_level(self):
        """Test atoms outside parentheses are top-level forms too."""
        forms = parse_script("42 x $me")
        assert forms == [NumberNode(42), VariableNode("x"), OperatorNode("$me")]

    def test_empty_list(self):
        """Test () parses as an empty list."""
        assert parse_script("()") == [ListNode(())]

    def test_unmatched_close_paren(self):
        """Test a ')' at the root is rejected."""
        with pytest.raises(UnbalancedParens):
            parse_script("(+ 1 2))")

    def test_unterminated_list(self):
        """Test a list left open at end of input is rejected."""
        with pytest.raises(UnbalancedParens) as excinfo:
            parse_script("(define x (+ 1 2)")
        assert "1 unclosed" in str(excinfo.value)

    def test_unbalanced_is_parse_error(self):
        """Test UnbalancedParens is reported as a ParseError."""
        with pytest.raises(ParseError) as excinfo:
            parse(tokenize(")"))
        assert excinfo.value.kind == "UnbalancedParens"


class TestNodes:
    """Tests for AST dump and re-serialization."""

    @pytest.mark.parametrize("script", [
        "(define x 1)",
        "(define f (lambda (a b) (+ a b x)))\n(f 1 2)",
        "(provide f g)\n($transfer (- 1 ($balance $me)) alice)",
        "()",
        "42",
    ])
    def test_round_trip(self, script):
        """Test unparse(parse(tokenize(s))) reproduces s."""
        assert unparse(parse_script(script)) == script

    def test_round_trip_ignores_whitespace_and_comments(self):
        """Test re-serialization normalizes layout."""
        script = """
        (define   x
            ( + 1 2 ))   ; three
        (println x)
        """
        assert unparse(parse_script(script)) == "(define x (+ 1 2))\n(println x)"

    def test_reparse_is_stable(self):
        """Test parsing the re-serialized text yields the same forest."""
        forms = parse_script("(a (b (c 1) $me) 2)")
        assert parse_script(unparse(forms)) == forms

    def test_ast_to_dict(self):
        """Test the debug dump tags every node."""
        dump = ast_to_dict(parse_script("($balance $me) 7"))
        assert dump == [
            {"type": "LIST", "children": [
                {"type": "OP", "value": "$balance"},
                {"type": "OP", "value": "$me"},
            ]},
            {"type": "NUM", "value": 7},
        ]

    def test_list_head_and_operands(self):
        """Test ListNode accessors."""
        node = parse_script("(+ 1 2)")[0]
        assert node.head == OperatorNode("+")
        assert node.operands == (NumberNode(1), NumberNode(2))

    def test_list_text_for_nested_head(self):
        """Test a nested head has no textual keyword."""
        assert parse_script("((f) 1)")[0].text == ""
        assert ListNode(()).text == ""

    def test_dump_depth_limit(self):
        """Test to_dict stops at max_depth levels of list nesting."""
        node = parse_script("(((x)))")[0]
        assert node.to_dict(max_depth=3)["children"][0]["children"][0]["children"] == [
            {"type": "VAR", "value": "x"},
        ]
        with pytest.raises(ResourceExhausted):
            node.to_dict(max_depth=2)

    def test_deeply_nested_script(self, deep_script):
        """Test dumping and re-serializing nesting beyond the recursion limit."""
        forms = parse_script(deep_script)
        with pytest.raises(ResourceExhausted):
            ast_to_dict(forms)
        dump = ast_to_dict(forms, max_depth=5000)
        assert dump[0]["children"][2]["type"] == "LIST"
        assert unparse(forms) == deep_script
