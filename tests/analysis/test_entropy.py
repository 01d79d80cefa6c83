"""Tests for header-entropy sampling."""

import os

import pytest

from spectra.analysis.entropy import MAX_ENTROPY, byte_entropy, sample_file_entropy


class TestByteEntropy:
    def test_empty_is_zero(self):
        assert byte_entropy(b"") == 0.0

    def test_single_symbol_is_zero(self):
        assert byte_entropy(b"A" * 1000) == 0.0

    def test_two_equiprobable_symbols(self):
        assert byte_entropy(b"AB" * 500) == pytest.approx(1.0)

    def test_all_byte_values_is_maximal(self):
        assert byte_entropy(bytes(range(256)) * 4) == pytest.approx(MAX_ENTROPY)

    def test_english_text_is_mid_range(self):
        text = b"The quick brown fox jumps over the lazy dog. " * 40
        assert 3.0 < byte_entropy(text) < 6.0


class TestSampleFileEntropy:
    def test_reads_only_the_header(self, tmp_path):
        path = tmp_path / "mixed.bin"
        path.write_bytes(b"A" * 16 + bytes(range(256)) * 8)
        assert sample_file_entropy(path, sample_size=16) == 0.0

    def test_random_content_is_high(self, tmp_path):
        path = tmp_path / "random.bin"
        path.write_bytes(os.urandom(8192))
        assert sample_file_entropy(path) > 7.5

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            sample_file_entropy(tmp_path / "gone.bin")
