import sys
from typing import Any, List, Optional, TextIO

from monkey.objects import NULL, Null, inspect


class BasicIO:
    def __init__(self, out: Optional[TextIO] = None):
        # None means "whatever sys.stdout is at call time"
        self.out = out

    def puts(self, values: List[Any]) -> Null:
        stream = self.out if self.out is not None else sys.stdout
        for value in values:
            stream.write(inspect(value) + '\n')
        stream.flush()
        return NULL
