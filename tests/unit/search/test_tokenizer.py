"""Unit tests for the query tokenizer."""

import pytest

from hemolymph.search.query import Param, SuperParam, UnterminatedInput, Word
from hemolymph.search.tokenizer import tokenize


@pytest.mark.unit
class TestWords:
    """Bare words split on whitespace."""

    def test_empty_query_yields_single_empty_word(self):
        assert tokenize("") == [Word("")]

    def test_whitespace_only_query_yields_single_empty_word(self):
        assert tokenize("   ") == [Word("")]

    def test_splits_on_spaces(self):
        assert tokenize("praying mantis") == [Word("praying"), Word("mantis")]

    def test_repeated_spaces_do_not_emit_empty_words(self):
        assert tokenize("a   b ") == [Word("a"), Word("b")]

    def test_relation_characters_in_plain_words_are_kept(self):
        assert tokenize("x=y wow!") == [Word("x=y"), Word("wow!")]


@pytest.mark.unit
class TestParams:
    """``key:value`` clauses."""

    def test_simple_param(self):
        assert tokenize("n:mantis") == [Param("n", "mantis")]

    def test_param_between_words(self):
        assert tokenize("red n:mantis ant") == [Word("red"), Param("n", "mantis"), Word("ant")]

    def test_value_keeps_later_colons(self):
        assert tokenize("n:a:b") == [Param("n", "a:b")]

    def test_empty_key(self):
        assert tokenize(":foo") == [Param("", "foo")]

    def test_empty_value(self):
        assert tokenize("c:") == [Param("c", "")]

    def test_comparison_value_is_verbatim(self):
        assert tokenize("cost:>=5") == [Param("cost", ">=5")]

    def test_negated_key_is_kept(self):
        assert tokenize("-n:mantis") == [Param("-n", "mantis")]


@pytest.mark.unit
class TestComparisonShorthand:
    """Numeric aliases accept ``key<op>value`` without a colon."""

    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("c>2", Param("c", ">2")),
            ("c<=1", Param("c", "<=1")),
            ("h=2", Param("h", "=2")),
            ("p!=2", Param("p", "!=2")),
            ("-d>1", Param("-d", ">1")),
        ],
    )
    def test_shorthand(self, query, expected):
        assert tokenize(query) == [expected]

    def test_non_numeric_alias_stays_a_word(self):
        assert tokenize("n=mantis") == [Word("n=mantis")]

    def test_lone_bang_stays_in_word(self):
        assert tokenize("c!") == [Word("c!")]


@pytest.mark.unit
class TestQuotedParams:
    """Quoted values keep their internal spaces."""

    def test_quoted_value(self):
        assert tokenize('n:"lost man"') == [Param("n", "lost man")]

    def test_quoted_value_followed_by_word(self):
        assert tokenize('kw:"flying defense" ant') == [Param("kw", "flying defense"), Word("ant")]

    def test_quote_inside_value_is_literal(self):
        assert tokenize('n:a"b') == [Param("n", 'a"b')]

    def test_unterminated_quote_consumes_to_end(self):
        assert tokenize('n:"lost man') == [Param("n", "lost man")]

    def test_unterminated_quote_raises_in_strict_mode(self):
        with pytest.raises(UnterminatedInput):
            tokenize('n:"lost man', strict=True)


@pytest.mark.unit
class TestSubqueries:
    """Parenthesized values are tokenized recursively."""

    def test_simple_subquery(self):
        assert tokenize("devours:(cost=1)") == [SuperParam("devours", (Param("cost", "=1"),))]

    def test_nested_parentheses_are_balanced(self):
        tokens = tokenize("dev:(cost=1 (nested) text)")

        assert tokens == [SuperParam("dev", (Param("cost", "=1"), Word("(nested)"), Word("text")))]

    def test_subquery_followed_by_word(self):
        assert tokenize("dev:(n:ant) mantis") == [SuperParam("dev", (Param("n", "ant"),)), Word("mantis")]

    def test_subquery_with_quoted_value(self):
        tokens = tokenize('dev:(n:"lost man")')

        assert tokens == [SuperParam("dev", (Param("n", "lost man"),))]

    def test_empty_subquery(self):
        assert tokenize("dev:()") == [SuperParam("dev", (Word(""),))]

    def test_unterminated_subquery_consumes_to_end(self):
        assert tokenize("dev:(cost=1 (x)") == [SuperParam("dev", (Param("cost", "=1"), Word("(x)")))]

    def test_unterminated_subquery_raises_in_strict_mode(self):
        with pytest.raises(UnterminatedInput):
            tokenize("dev:(cost=1", strict=True)
