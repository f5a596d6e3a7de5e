import copy
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from cachedcall import CachedCallException, class_table, instance_table, known_class_tables, MemoTable
from zuper_commons.test_utils import assert_raises, my_assert, my_assert_equal
from .utils import Counter


def test_instance_tables_are_independent() -> None:
    class Thing:
        pass

    a, b = Thing(), Thing()
    my_assert(instance_table(a) is instance_table(a))
    my_assert(instance_table(a) is not instance_table(b))
    my_assert(not instance_table(a).locked)

    f = Counter("r")
    instance_table(a).get_or_compute("m", [1], f)
    instance_table(b).get_or_compute("m", [1], f)
    my_assert_equal(f.count, 2)


def test_instance_table_needs_dict() -> None:
    class Slotted:
        __slots__ = ("x",)

    with assert_raises(CachedCallException):
        instance_table(Slotted())


def test_class_table_is_shared() -> None:
    class Thing:
        pass

    class Special(Thing):
        pass

    t = class_table(Thing)
    my_assert(t is class_table(Thing))
    my_assert(t.locked)
    my_assert(class_table(Special) is not t)
    my_assert(known_class_tables()[Thing] is t)


def test_class_table_computes_once_under_concurrency() -> None:
    class Shared:
        pass

    table = class_table(Shared)
    calls = []

    def slow(x):
        calls.append(x)
        time.sleep(0.05)
        return x * 2

    results = []

    def worker():
        results.append(table.get_or_compute("Shared.slow", [21], slow))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    my_assert_equal(calls, [21])
    my_assert_equal(results, [42] * 8)


def test_class_table_reentrant() -> None:
    class Nested:
        pass

    table = class_table(Nested)

    def inner(x):
        return x + 1

    def outer(x):
        return table.get_or_compute("Nested.inner", [x], inner) * 10

    my_assert_equal(table.get_or_compute("Nested.outer", [1], outer), 20)
    my_assert(table.is_cached("Nested.inner", [1]))


def test_copied_instance_gets_its_own_table() -> None:
    class Thing:
        pass

    a = Thing()
    f = Counter("r")
    instance_table(a).get_or_compute("m", [5], f)
    b = copy.copy(a)
    tb = instance_table(b)
    my_assert(tb is not instance_table(a))
    # starts from the entries of the original
    my_assert(tb.is_cached("m", [5]))

    tb.enabled = False
    my_assert(instance_table(a).enabled)
    tb.enabled = True
    tb.get_or_compute("m", [9], f)
    my_assert(not instance_table(a).is_cached("m", [9]))
    instance_table(a).get_or_compute("m", [10], f)
    my_assert(not tb.is_cached("m", [10]))


def test_deep_copied_instance_gets_its_own_table() -> None:
    class Thing:
        pass

    a = Thing()
    instance_table(a).get_or_compute("m", [1], Counter("r"))
    b = copy.deepcopy(a)
    my_assert(instance_table(b) is not instance_table(a))
    my_assert(instance_table(b).is_cached("m", [1]))


def test_copied_table() -> None:
    t = MemoTable(name="t")
    t.get_or_compute("m", [1], Counter(1))
    u = copy.copy(t)
    my_assert_equal(len(u), 1)
    u.reset()
    my_assert_equal(len(t), 1)


def test_class_table_other_keys_not_blocked() -> None:
    class Pooled:
        pass

    table = class_table(Pooled)

    def inner(x):
        return x + 1

    with ThreadPoolExecutor(max_workers=1) as pool:

        def outer(x):
            # another thread uses the same class table while we compute
            fut = pool.submit(table.get_or_compute, "Pooled.inner", [x], inner)
            return fut.result(timeout=5.0) * 10

        my_assert_equal(table.get_or_compute("Pooled.outer", [1], outer), 20)

    my_assert(table.is_cached("Pooled.inner", [1]))
    my_assert(table.is_cached("Pooled.outer", [1]))


def test_class_table_failure_lets_waiters_retry() -> None:
    class Flaky:
        pass

    table = class_table(Flaky)
    started = threading.Event()
    release = threading.Event()
    calls = []

    def failing(x):
        calls.append("fail")
        started.set()
        release.wait(5.0)
        raise ValueError(x)

    def working(x):
        calls.append("work")
        return x

    errors = []

    def first():
        try:
            table.get_or_compute("Flaky.f", [1], failing)
        except ValueError as e:
            errors.append(e)

    results = []

    def second():
        results.append(table.get_or_compute("Flaky.f", [1], working))

    t1 = threading.Thread(target=first)
    t1.start()
    started.wait(5.0)
    t2 = threading.Thread(target=second)
    t2.start()
    # t2 waits for the key in flight
    time.sleep(0.05)
    my_assert_equal(calls, ["fail"])
    release.set()
    t1.join()
    t2.join()

    my_assert_equal(len(errors), 1)
    my_assert_equal(results, [1])
    my_assert_equal(calls, ["fail", "work"])
    my_assert(table.is_cached("Flaky.f", [1]))
