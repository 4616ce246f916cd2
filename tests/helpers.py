# tests/helpers.py

import random


class ScriptedRandom(random.Random):
    """
    A random source whose randrange() returns preset values in order, so a
    test can say exactly where mines go.
    """

    def __init__(self, values):
        super().__init__(0)
        self.values = list(values)

    def randrange(self, *args, **kwargs):
        return self.values.pop(0)
