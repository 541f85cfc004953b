"""Run deeply recursive work on a thread with a large stack.

The parser and the evaluator both recurse over the program tree, and a single
Monkey function call costs about ten Python frames. Python's default limit of
1000 frames would stop ordinary recursive Monkey programs after a few dozen
calls, so `call_with_deep_stack` runs the work on a worker thread whose stack
and recursion limit are sized for thousands of Monkey calls.
"""

import sys
import threading
from typing import Any, Callable

RECURSION_LIMIT = 50_000
STACK_SIZE = 256 * 1024 * 1024


def call_with_deep_stack(func: Callable[..., Any], *args: Any) -> Any:
    """Call `func(*args)` on a worker thread and return its result.

    Exceptions raised by `func` (including `RecursionError` when even the
    raised limit is exhausted) are re-raised in the calling thread.
    """
    outcome = {}

    def target():
        try:
            outcome['value'] = func(*args)
        except BaseException as e:  # re-raised below in the caller's thread
            outcome['error'] = e

    old_limit = sys.getrecursionlimit()
    old_size = threading.stack_size(STACK_SIZE)
    try:
        sys.setrecursionlimit(max(old_limit, RECURSION_LIMIT))
        worker = threading.Thread(target=target, name='monkey-eval')
        worker.start()
        worker.join()
    finally:
        threading.stack_size(old_size)
        sys.setrecursionlimit(old_limit)

    if 'error' in outcome:
        raise outcome['error']
    return outcome.get('value')
