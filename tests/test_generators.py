"""
Tests for identifier generators (random and timestamp).
"""

import re
from unittest.mock import patch

from src.requestid import IDGenerator, new_random_id_generator, new_timestamp_id_generator

RANDOM_ID = re.compile(r"^[0-9a-f]{32}$")
TIMESTAMP_ID = re.compile(r"^\d+\.\d+\.[0-9a-f]{4}$")


def _timestamp_part(request_id: str) -> float:
    return float(request_id.rsplit(".", 1)[0])


class TestRandomIDGenerator:
    def test_satisfies_protocol(self):
        assert isinstance(new_random_id_generator(), IDGenerator)

    def test_format_is_32_lowercase_hex(self):
        gen = new_random_id_generator()
        for _ in range(100):
            assert RANDOM_ID.match(gen.generate())

    def test_no_collisions_in_100k_samples(self):
        gen = new_random_id_generator()
        ids = {gen.generate() for _ in range(100_000)}
        assert len(ids) == 100_000

    def test_encodes_entropy_bytes(self):
        gen = new_random_id_generator()
        with patch("src.requestid.generators.os.urandom", return_value=bytes(range(16))):
            assert gen.generate() == "000102030405060708090a0b0c0d0e0f"

    def test_entropy_failure_degrades_to_empty_id(self):
        """Degraded, not desirable: callers get "" and must treat it as no id."""
        gen = new_random_id_generator()
        with patch("src.requestid.generators.os.urandom", side_effect=OSError("no entropy")):
            assert gen.generate() == ""

    def test_entropy_unavailable_degrades_to_empty_id(self):
        gen = new_random_id_generator()
        with patch(
            "src.requestid.generators.os.urandom", side_effect=NotImplementedError("no source")
        ):
            assert gen.generate() == ""


class TestTimestampIDGenerator:
    def test_satisfies_protocol(self):
        assert isinstance(new_timestamp_id_generator(), IDGenerator)

    def test_format(self):
        gen = new_timestamp_id_generator()
        for _ in range(100):
            assert TIMESTAMP_ID.match(gen.generate())

    def test_exact_rendering(self):
        gen = new_timestamp_id_generator()
        with patch("src.requestid.generators.time.time_ns", return_value=1_700_000_000_250_000_000), patch(
            "src.requestid.generators.os.urandom", return_value=b"\xab\xcd"
        ):
            assert gen.generate() == "1700000000.250000.abcd"

    def test_six_fractional_digits(self):
        gen = new_timestamp_id_generator()
        seconds, fraction, suffix = gen.generate().split(".")
        assert len(fraction) == 6
        assert len(suffix) == 4

    def test_timestamp_is_non_decreasing(self):
        gen = new_timestamp_id_generator()
        stamps = [_timestamp_part(gen.generate()) for _ in range(1000)]
        assert stamps == sorted(stamps)

    def test_suffix_distinguishes_same_tick(self):
        gen = new_timestamp_id_generator()
        with patch("src.requestid.generators.time.time_ns", return_value=1_700_000_000_000_000_000):
            ids = {gen.generate() for _ in range(50)}
        # 50 draws from 65536 suffixes: collisions possible but many distinct values expected
        assert len(ids) > 40

    def test_entropy_failure_degrades_to_zero_suffix(self):
        """Degraded, not desirable: ids minted in the same tick can collide."""
        gen = new_timestamp_id_generator()
        with patch("src.requestid.generators.os.urandom", side_effect=OSError("no entropy")):
            request_id = gen.generate()
        assert TIMESTAMP_ID.match(request_id)
        assert request_id.endswith(".0000")
