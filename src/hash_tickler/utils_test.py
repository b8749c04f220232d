import pytest
from hash_tickler.models.password_spec import ConfigurationError
from hash_tickler.utils import build_spec, load_alphabet, load_alphabet_file


class TestLoadAlphabet:
    """Test suite for alphabet option parsing"""

    def test_preset(self):
        assert len(load_alphabet("digits")) == 10

    def test_literal(self):
        assert load_alphabet("xyz").symbols == ("x", "y", "z")

    def test_literal_prefix(self):
        """Symbols that spell a preset name are still usable as literals"""
        assert load_alphabet("literal:hex").symbols == ("h", "e", "x")
        assert len(load_alphabet("hex")) == 16

    def test_literal_prefix_with_separator(self):
        assert load_alphabet("literal:digits,lower", separator=",").symbols == ("digits", "lower")

    def test_separator(self):
        assert load_alphabet("foo,bar,x", separator=",").symbols == ("foo", "bar", "x")

    def test_file(self, tmp_path):
        path = tmp_path / "symbols.txt"
        path.write_text("red\ngreen\n\nblue\n", encoding="utf-8")
        assert load_alphabet(f"@{path}").symbols == ("red", "green", "blue")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Could not read alphabet file"):
            load_alphabet_file(str(tmp_path / "missing.txt"))

    def test_duplicate_literal(self):
        with pytest.raises(ConfigurationError):
            load_alphabet("aa")


class TestBuildSpec:
    """Test suite for build_spec()"""

    def test_build_spec(self):
        spec = build_spec("lower", 6)
        assert spec.total == 26**6

    def test_invalid_length(self):
        with pytest.raises(ConfigurationError):
            build_spec("lower", 0)
