"""Shortcode generation utility

This module provides a helper function for generating random, fixed-length
candidate shortcodes. Candidates are not unique on their own: the caller is
responsible for checking them against the data store before use.

Functions:
    generate_shortcode(length=5):
        Generate a random Base62 string suitable for use as a URL slug.

Example:
    >>> from ephemurl.utils import generate_shortcode
    >>> generate_shortcode()
    'Gh7W1'
"""

import string
import secrets

from ephemurl.utils.constants import DEFAULT_SHORTCODE_LENGTH


ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
BASE = len(ALPHABET)  # 26 uppercase + 26 lowercase + 10 digits


def generate_shortcode(length: int = DEFAULT_SHORTCODE_LENGTH) -> str:
    """Generate a random shortcode drawn uniformly from the Base62 alphabet.

    Each symbol is picked independently with `secrets.choice`, so every one of
    the BASE**length codes is equally likely.

    Args:
        length (int, optional):
            Number of symbols in the resulting code.
            Defaults to 5 (916,132,832 possible codes).

    Returns:
        str: A random alphanumeric code of exactly `length` characters.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is not positive.

    Example:
        >>> generate_shortcode(length=7)
        'q0ZbT3k'

    NOTE:
        - Widen `length` rather than raising the retry budget if collisions
          become frequent in practice.
    """
    # bool is an int subclass but never a sensible length
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
