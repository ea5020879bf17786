import math

import pytest

from bitbloom import BloomFilter, InvalidParameterError, to_bytes
from bitbloom.hashing import DIGESTS


class TestConstruction:
    def test_calculations(self):
        bloom = BloomFilter(50000, 0.01)
        assert bloom.bit_count == 479253
        assert bloom.hash_count == 7
        assert bloom.false_positive_rate == 0.01
        assert bloom.expected_elements == 50000

    def test_bit_array_holds_every_probe(self):
        bloom = BloomFilter(50000, 0.01)
        assert len(bloom.bit_array) == math.ceil(479253 / 8)

    @pytest.mark.parametrize("n, p", [(-1, 0.01), (0, 0.01), (10, 1.5), (10, 0.0), (10, 1.0)])
    def test_invalid_parameters(self, n, p):
        with pytest.raises(InvalidParameterError):
            BloomFilter(n, p)

    def test_unknown_hash(self):
        with pytest.raises(InvalidParameterError):
            BloomFilter(10, 0.1, hash_name="md5")

    def test_estimated_rate_near_target(self):
        assert BloomFilter(50000, 0.01).estimated_false_positive_rate() == pytest.approx(0.01, rel=0.05)

    def test_repr(self):
        assert "hash_count=7" in repr(BloomFilter(50000, 0.01))


class TestMembership:
    def test_add_and_has(self):
        bloom = BloomFilter(10, 0.1)
        bloom.add("x")
        assert bloom.has("x")
        assert "x" in bloom

    def test_empty_filter_has_nothing(self):
        bloom = BloomFilter(10, 0.1)
        assert not bloom.has("x")
        assert not bloom.has(b"")

    def test_numeric_strings(self):
        bloom = BloomFilter(100, 0.01)
        members = [str(i) for i in range(100)]
        bloom.update(members)
        assert all(bloom.has(m) for m in members)

    @pytest.mark.parametrize("hash_name", sorted(DIGESTS))
    def test_no_false_negatives_past_capacity(self, hash_name):
        bloom = BloomFilter(10, 0.1, hash_name=hash_name)
        members = [f"member-{i}".encode() for i in range(500)]
        bloom.update(members)
        assert all(m in bloom for m in members)

    def test_str_and_utf8_bytes_are_the_same_member(self):
        bloom = BloomFilter(10, 0.1)
        bloom.add("héllo")
        assert bloom.has("héllo".encode("utf-8"))
        assert bloom.has(bytearray("héllo".encode("utf-8")))
        assert bloom.has(memoryview("héllo".encode("utf-8")))

    def test_add_sets_at_most_hash_count_bits(self):
        bloom = BloomFilter(1000, 0.01)
        bloom.add(b"one")
        assert 1 <= sum(bin(byte).count("1") for byte in bloom.bit_array) <= bloom.hash_count

    def test_rejects_non_bytes(self):
        bloom = BloomFilter(10, 0.1)
        with pytest.raises(TypeError, match="to_bytes"):
            bloom.add(42)
        with pytest.raises(TypeError):
            bloom.has(3.5)

    def test_to_bytes_members(self):
        bloom = BloomFilter(10, 0.1)
        bloom.add(to_bytes(42))
        assert bloom.has(to_bytes(42))
        assert bloom.has("42")


class TestFalsePositives:
    @pytest.mark.parametrize("hash_name", ["xxh64", "murmur3"])
    def test_rate_at_capacity(self, hash_name):
        n = 10000
        bloom = BloomFilter(n, 0.01, hash_name=hash_name)
        bloom.update(str(i) for i in range(n))

        probes = [f"absent-{i}" for i in range(20000)]
        rate = sum(1 for p in probes if p in bloom) / len(probes)
        assert rate <= bloom.estimated_false_positive_rate() + 0.01

    def test_high_error_rate(self):
        bloom = BloomFilter(5, 0.5)
        bloom.update(f"m{i}" for i in range(5))

        probes = [f"probe-{i}" for i in range(2000)]
        rate = sum(1 for p in probes if p in bloom) / len(probes)
        assert rate > 0.05


class TestDeterminism:
    @pytest.mark.parametrize("hash_name", sorted(DIGESTS))
    def test_same_inputs_same_bits(self, hash_name):
        members = [f"item-{i}" for i in range(200)]
        first = BloomFilter(100, 0.01, hash_name=hash_name)
        second = BloomFilter(100, 0.01, hash_name=hash_name)
        first.update(members)
        second.update(members)
        assert first.bit_array == second.bit_array

    def test_digests_lay_out_bits_differently(self):
        xxh = BloomFilter(100, 0.01, hash_name="xxh64")
        fnv = BloomFilter(100, 0.01, hash_name="fnv1a")
        xxh.add(b"member")
        fnv.add(b"member")
        assert xxh.bit_array != fnv.bit_array


class TestClearAndOverride:
    def _populated(self):
        bloom = BloomFilter(100, 0.01)
        members = [str(i) for i in range(50)]
        bloom.update(members)
        return bloom, members

    def test_clear(self):
        bloom, members = self._populated()
        bloom.clear()
        assert not any(bloom.has(m) for m in members)
        assert bloom.bit_count == 959

    def test_set_hash_count(self):
        bloom, members = self._populated()
        bloom.set_hash_count(3)
        assert bloom.hash_count == 3
        assert not any(bloom.has(m) for m in members)

    def test_set_bit_count(self):
        bloom, members = self._populated()
        bloom.set_bit_count(64)
        assert bloom.bit_count == 64
        assert len(bloom.bit_array) == 8
        assert not any(bloom.has(m) for m in members)

    def test_overrides_change_estimate(self):
        bloom = BloomFilter(100, 0.01)
        before = bloom.estimated_false_positive_rate()
        bloom.set_bit_count(100)
        assert bloom.estimated_false_positive_rate() > before

    def test_usable_after_override(self):
        bloom = BloomFilter(100, 0.01)
        bloom.set_bit_count(4096)
        bloom.set_hash_count(4)
        bloom.update(str(i) for i in range(100))
        assert all(bloom.has(str(i)) for i in range(100))

    @pytest.mark.parametrize("value", [0, -3, 2.5, True])
    def test_invalid_override(self, value):
        bloom = BloomFilter(100, 0.01)
        with pytest.raises(InvalidParameterError):
            bloom.set_hash_count(value)
        with pytest.raises(InvalidParameterError):
            bloom.set_bit_count(value)
        assert bloom.bit_count == 959
        assert bloom.hash_count == 7
