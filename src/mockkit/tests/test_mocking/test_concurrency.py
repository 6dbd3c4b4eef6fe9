import threading
from concurrent.futures import ThreadPoolExecutor

from mockkit.mocking import Mock, any_value, exactly

THREADS = 8
CALLS_PER_THREAD = 50


def test_concurrent_dispatch_records_every_call(value_mock: Mock):
    """
    Behavior:
      - Several threads call the same mock at once.
      - Every call must be recorded exactly once with a unique sequence number.
    """
    value_mock.setup("get_value", any_value()).returns(1)
    barrier = threading.Barrier(THREADS)

    def worker(n: int) -> int:
        barrier.wait()
        return sum(value_mock.object.get_value(n) for _ in range(CALLS_PER_THREAD))

    with ThreadPoolExecutor(max_workers=THREADS) as pool:
        totals = list(pool.map(worker, range(THREADS)))

    assert totals == [CALLS_PER_THREAD] * THREADS
    value_mock.verify("get_value", times=exactly(THREADS * CALLS_PER_THREAD))
    sequences = [inv.sequence for inv in value_mock.invocations]
    assert sorted(sequences) == list(range(THREADS * CALLS_PER_THREAD))


def test_each_sequence_step_is_consumed_once(value_mock: Mock):
    """
    Behavior:
      - A sequence of N values shared by more than N concurrent calls.
      - Each value is handed out exactly once; the remaining calls get the default.
    """
    steps = list(range(1, 101))
    value_mock.setup("get_value", 1).returns_sequence(*steps)
    barrier = threading.Barrier(THREADS)

    def worker(_: int) -> list[int]:
        barrier.wait()
        return [value_mock.object.get_value(1) for _ in range(20)]

    with ThreadPoolExecutor(max_workers=THREADS) as pool:
        results = [value for chunk in pool.map(worker, range(THREADS)) for value in chunk]

    handed_out = [r for r in results if r != 0]
    assert sorted(handed_out) == steps
    assert results.count(0) == THREADS * 20 - len(steps)
