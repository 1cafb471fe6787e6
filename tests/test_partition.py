import pytest

from S7_Search import WorkerRange, partition_range


def covered(ranges):
    values = []
    for r in ranges:
        values.extend(range(r.start, r.end + 1))
    return values


@pytest.mark.parametrize("limit", [2, 3, 4, 5, 7, 8, 9, 10, 17, 20, 64, 100, 101, 1000, 12345])
@pytest.mark.parametrize("workers", [1, 2, 3, 4, 7, 8, 16, 64])
def test_partition_is_exact_cover(limit, workers):
    ranges = partition_range(limit, workers)
    values = covered(ranges)
    assert values == list(range(2, limit + 1))
    assert len(ranges) <= workers
    for r in ranges:
        assert r.start <= r.end
    for a, b in zip(ranges, ranges[1:]):
        assert b.start == a.end + 1
    assert [r.worker_id for r in ranges] == list(range(len(ranges)))


def test_limit_20_four_workers():
    ranges = partition_range(20, 4)
    assert [(r.start, r.end) for r in ranges] == [(2, 5), (6, 10), (11, 15), (16, 20)]
    assert all(r.size > 0 for r in ranges)


def test_single_worker_takes_everything():
    assert partition_range(100, 1) == [WorkerRange(worker_id=0, start=2, end=100)]


def test_more_workers_than_numbers():
    ranges = partition_range(3, 8)
    assert [(r.start, r.end) for r in ranges] == [(2, 3)]


def test_limit_below_two_is_empty():
    assert partition_range(1, 4) == []
    assert partition_range(0, 1) == []
    assert partition_range(-5, 2) == []


def test_workers_must_be_positive():
    with pytest.raises(ValueError):
        partition_range(100, 0)
