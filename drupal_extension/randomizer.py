"""
Random values for generated users, content and terms.
"""

import random
import string


class Random(object):
    """ Produces names that are unique within a run. """

    def __init__(self, seed=None):
        self._random = random.Random(seed)
        self._seen = set()

    def name(self, length=8):
        """
        Returns a random lower case alphanumeric string starting with a letter.

        Args:
            length (int): number of characters.
        """

        if length < 1:
            raise ValueError('length must be at least 1')
        while True:
            first = self._random.choice(string.ascii_lowercase)
            rest = ''.join(self._random.choice(string.ascii_lowercase + string.digits)
                           for _ in range(length - 1))
            value = (first + rest)[:length]
            if value not in self._seen:
                self._seen.add(value)
                return value
