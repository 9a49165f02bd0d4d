"""Tests for language label normalization."""
import pytest

from codesync.extraction.language import normalize_language


class TestSubstringPhase:
    """Labels resolved by the ordered substring checks."""

    @pytest.mark.parametrize("label", ["Python3", "python", "Python 3", "PyPy 3", "python2"])
    def test_python_variants(self, label):
        assert normalize_language(label) == "python"

    def test_javascript_is_not_java(self):
        assert normalize_language("JavaScript") == "javascript"
        assert normalize_language("Java") == "java"
        assert normalize_language("Java 21") == "java"

    def test_cpp_and_c_are_distinct(self):
        assert normalize_language("C++") == "cpp"
        assert normalize_language("C") == "c"
        assert normalize_language("C++") != normalize_language("C")

    def test_codeforces_compiler_labels(self):
        assert normalize_language("GNU G++17 7.3.0") == "cpp"
        assert normalize_language("GNU C 11") == "c"

    def test_csharp(self):
        assert normalize_language("C#") == "csharp"

    def test_go_needs_a_whole_word(self):
        assert normalize_language("Go") == "go"
        assert normalize_language("Golang") == "go"
        assert normalize_language("MongoDB") == "mongodb"

    def test_shell_and_sql(self):
        assert normalize_language("Bash") == "bash"
        assert normalize_language("MySQL") == "sql"


class TestAliasPhase:
    """Abbreviations resolved by the alias table."""

    @pytest.mark.parametrize("label, expected", [
        ("py", "python"),
        ("rs", "rust"),
        ("cs", "csharp"),
        ("kt", "kotlin"),
        ("rb", "ruby"),
        ("js", "javascript"),
        ("TS", "typescript"),
        ("sh", "bash"),
    ])
    def test_aliases(self, label, expected):
        assert normalize_language(label) == expected


class TestUnresolved:
    """Labels neither phase recognizes."""

    def test_empty_is_unknown(self):
        assert normalize_language("") == "unknown"
        assert normalize_language(None) == "unknown"
        assert normalize_language("   ") == "unknown"

    def test_unknown_stays_unknown(self):
        assert normalize_language("unknown") == "unknown"
        assert normalize_language("Unknown") == "unknown"

    def test_unrecognized_token_returned_stripped(self):
        assert normalize_language("Racket") == "racket"
        assert normalize_language("Elixir 1.15") == "elixir115"

    def test_only_punctuation_is_unknown(self):
        assert normalize_language("!!") == "unknown"
