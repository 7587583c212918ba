"""Utility functions."""

GLOB_CHARS = ('*', '[', '?')


def split_glob(s: str) -> tuple[str, str]:
    """Split a glob expression into its literal prefix and the rest.

    The prefix is what can be handed to a listing call, the rest is what has to
    be matched client side. Escaped wildcards are part of the prefix. Only
    fnmatch wildcards count, braces are literal since there is no brace
    expansion.

    >>> split_glob('data/2024/*.json')
    ('data/2024/', '*.json')
    >>> split_glob('data/file.txt')
    ('data/file.txt', '')
    """
    for i, c in enumerate(s):
        if c in GLOB_CHARS and (i == 0 or s[i - 1] != '\\'):
            return s[:i], s[i:].lstrip('/')
    return s, ''
