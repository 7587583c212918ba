"""Tests for utility functions."""

import pytest

from objstore.util.util import split_glob


class TestSplitGlob:
    @pytest.mark.parametrize(
        ('s', 'expected'),
        [
            ('data/2024/*.json', ('data/2024/', '*.json')),
            ('data/file.txt', ('data/file.txt', '')),
            ('*.txt', ('', '*.txt')),
            ('data/part-?.csv', ('data/part-', '?.csv')),
            ('data/[ab]/x', ('data/', '[ab]/x')),
            (r'data/\*/x*', (r'data/\*/x', '*')),
            ('', ('', '')),
            ('a{b,c}.txt', ('a{b,c}.txt', '')),
            ('data/{a,b}/*.json', ('data/{a,b}/', '*.json')),
        ],
    )
    def test_split_glob(self, s: str, expected: tuple[str, str]) -> None:
        assert split_glob(s) == expected
