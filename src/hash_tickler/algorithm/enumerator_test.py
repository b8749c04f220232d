import itertools

import pytest
from hash_tickler.algorithm.enumerator import EnumerationCursor, candidates, produce
from hash_tickler.models.password_spec import Alphabet, ConfigurationError, PasswordSpec


@pytest.fixture
def spec_ab2():
    return PasswordSpec.of(["a", "b"], 2)


@pytest.fixture
def spec_abc3():
    return PasswordSpec(Alphabet.from_string("abc"), 3)


class TestProduce:
    """Test suite for produce()"""

    def test_digit_order(self, spec_ab2):
        """Least significant symbol comes first"""
        assert [produce(spec_ab2, s) for s in range(4)] == ["aa", "ba", "ab", "bb"]

    def test_zero_is_first_symbol_repeated(self, spec_abc3):
        assert produce(spec_abc3, 0) == "aaa"

    def test_last_state(self, spec_abc3):
        assert produce(spec_abc3, spec_abc3.total - 1) == "ccc"

    def test_known_values(self, spec_abc3):
        # 5 = 2 + 1*3 -> digits 2, 1, 0
        assert produce(spec_abc3, 5) == "cba"
        # 9 = 0 + 0*3 + 1*9
        assert produce(spec_abc3, 9) == "aab"

    def test_multi_character_symbols(self):
        spec = PasswordSpec.of(["foo", "x"], 3)
        assert produce(spec, 1) == "xfoofoo"
        assert produce(spec, 6) == "fooxx"

    def test_bijection(self, spec_abc3):
        """Every state decodes to a distinct string of exactly L symbols"""
        produced = [produce(spec_abc3, s) for s in range(spec_abc3.total)]
        assert len(set(produced)) == spec_abc3.total
        assert all(len(p) == 3 and set(p) <= {"a", "b", "c"} for p in produced)

    def test_coverage(self, spec_abc3):
        """The produced strings are exactly the Cartesian product"""
        produced = sorted(produce(spec_abc3, s) for s in range(spec_abc3.total))
        expected = sorted("".join(p) for p in itertools.product("abc", repeat=3))
        assert produced == expected

    def test_random_access_is_stable(self):
        spec = PasswordSpec(Alphabet.from_preset("lower"), 6)
        state = 123_456_789
        assert produce(spec, state) == produce(spec, state)

    def test_large_state(self):
        spec = PasswordSpec(Alphabet.from_string("01"), 63)
        assert produce(spec, spec.total - 1) == "1" * 63
        assert produce(spec, 1) == "1" + "0" * 62

    def test_out_of_range(self, spec_ab2):
        with pytest.raises(IndexError):
            produce(spec_ab2, 4)
        with pytest.raises(IndexError):
            produce(spec_ab2, -1)


class TestCandidates:
    """Test suite for the lazy candidate sequence"""

    def test_sequence(self, spec_ab2):
        assert list(candidates(spec_ab2)) == ["aa", "ba", "ab", "bb"]

    def test_start(self, spec_ab2):
        assert list(candidates(spec_ab2, start=2)) == ["ab", "bb"]

    def test_is_lazy(self):
        spec = PasswordSpec(Alphabet.from_preset("alnum"), 10)
        sequence = candidates(spec)
        assert next(sequence) == "a" * 10
        assert next(sequence) == "b" + "a" * 9

    def test_restartable(self, spec_abc3):
        assert list(candidates(spec_abc3)) == list(candidates(spec_abc3))


class TestEnumerationCursor:
    """Test suite for EnumerationCursor class"""

    def test_starts_at_zero(self, spec_ab2):
        cursor = EnumerationCursor(spec_ab2)
        assert cursor.state == 0
        assert cursor.remaining == 4
        assert not cursor.exhausted
        assert cursor.candidate() == "aa"

    def test_advance_returns_new_cursor(self, spec_ab2):
        cursor = EnumerationCursor(spec_ab2)
        advanced = cursor.advance()
        assert cursor.state == 0
        assert advanced.state == 1
        assert advanced.candidate() == "ba"

    def test_walk_to_exhaustion(self, spec_ab2):
        cursor = EnumerationCursor(spec_ab2)
        seen = []
        while not cursor.exhausted:
            seen.append(cursor.candidate())
            cursor = cursor.advance()
        assert seen == ["aa", "ba", "ab", "bb"]
        assert cursor.remaining == 0

    def test_exhausted_cursor(self, spec_ab2):
        cursor = EnumerationCursor(spec_ab2, 4)
        with pytest.raises(IndexError):
            cursor.advance()
        with pytest.raises(IndexError):
            cursor.candidate()

    def test_state_out_of_range(self, spec_ab2):
        with pytest.raises(ConfigurationError):
            EnumerationCursor(spec_ab2, 5)
        with pytest.raises(ConfigurationError):
            EnumerationCursor(spec_ab2, -1)
