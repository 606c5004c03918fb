import threading

import pytest

from gcache.core.errors import StackEmptyError
from gcache.core.stack import FreeIndexStack


def test_stack_empty():
    s = FreeIndexStack()

    assert s.size() == 0
    assert s.is_empty() is True

    with pytest.raises(StackEmptyError):
        s.top()
    with pytest.raises(StackEmptyError):
        s.pop()


def test_stack_push_pop_single():
    s = FreeIndexStack()

    s.push(1)
    assert s.top() == 1
    assert s.pop() == 1
    assert s.is_empty() is True


def test_stack_is_lifo():
    s = FreeIndexStack()

    s.push(1)
    s.push(2)
    s.push(3)

    assert s.size() == 3
    assert len(s) == 3
    assert s.snapshot() == [1, 2, 3]
    assert s.pop() == 3
    assert s.pop() == 2
    assert s.pop() == 1
    assert s.is_empty() is True


def test_stack_concurrent_pops_hand_out_each_slot_once():
    s = FreeIndexStack()
    for i in range(1000):
        s.push(i)

    popped = []
    lock = threading.Lock()
    start = threading.Barrier(4)

    def worker():
        start.wait()
        while True:
            try:
                v = s.pop()
            except StackEmptyError:
                return
            with lock:
                popped.append(v)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(popped) == list(range(1000))
    assert s.is_empty() is True
