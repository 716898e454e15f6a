import pytest

from seamlog.keyspan import KeyRange, KeySpan, SpanOrdering

O = SpanOrdering


@pytest.mark.parametrize(
    "left, right, expected",
    [
        ((b"k1", b""), (b"k1", b""), O.EQUAL),
        ((b"k1", b""), (b"k2", b""), O.LESS_DISJOINT),
        ((b"k1", b""), (b"k0", b""), O.GREATER_DISJOINT),
        ((b"k1", b""), (b"k2", b"k20"), O.LESS_DISJOINT),
        ((b"k1", b""), (b"k1", b"k10"), O.SUBSET_LEFT),
        ((b"k1", b""), (b"k0", b"k10"), O.SUBSET_ALL),
        ((b"k1", b""), (b"k0", b"k1"), O.GREATER_CONTIGUOUS),
        ((b"k1", b""), (b"k0", b"k01"), O.GREATER_DISJOINT),
        ((b"k2", b"k20"), (b"k1", b""), O.GREATER_DISJOINT),
        ((b"k1", b"k10"), (b"k1", b""), O.CONTAIN_LEFT),
        ((b"k0", b"k10"), (b"k1", b""), O.CONTAIN_ALL),
        ((b"k0", b"k1"), (b"k1", b""), O.LESS_CONTIGUOUS),
        ((b"k0", b"k01"), (b"k1", b""), O.LESS_DISJOINT),
        ((b"k1", b"k10"), (b"k2", b"k20"), O.LESS_DISJOINT),
        ((b"k1", b"k10"), (b"k10", b"k20"), O.LESS_CONTIGUOUS),
        ((b"k1", b"k10"), (b"k0", b"k1"), O.GREATER_CONTIGUOUS),
        ((b"k1", b"k10"), (b"k0", b"k00"), O.GREATER_DISJOINT),
        ((b"k1", b"k11"), (b"k10", b"k12"), O.INTERSECT_RIGHT),
        ((b"k1", b"k11"), (b"k10", b"k11"), O.CONTAIN_RIGHT),
        ((b"k1", b"k12"), (b"k10", b"k11"), O.CONTAIN_ALL),
        ((b"k1", b"k12"), (b"k1", b"k12"), O.EQUAL),
        ((b"k1", b"k12"), (b"k1", b"k13"), O.SUBSET_LEFT),
        ((b"k1", b"k12"), (b"k1", b"k11"), O.CONTAIN_LEFT),
        ((b"k10", b"k12"), (b"k1", b"k11"), O.INTERSECT_LEFT),
        ((b"k10", b"k11"), (b"k1", b"k11"), O.SUBSET_RIGHT),
        ((b"k10", b"k11"), (b"k1", b"k12"), O.SUBSET_ALL),
    ],
)
def test_compare(left, right, expected):
    assert KeySpan(*left).compare(KeySpan(*right)) == expected


@pytest.mark.parametrize(
    "left, right",
    [
        ((b"k1", b"k11"), (b"k10", b"k12")),
        ((b"k1", b""), (b"k0", b"k10")),
        ((b"k1", b"k10"), (b"k10", b"k20")),
        ((b"k1", b"k12"), (b"k1", b"k13")),
    ],
)
def test_compare_is_symmetric(left, right):
    a, b = KeySpan(*left), KeySpan(*right)
    assert b.compare(a) == a.compare(b).reverse()


@pytest.mark.parametrize(
    "ordering, reversed_ordering",
    [
        (O.LESS_DISJOINT, O.GREATER_DISJOINT),
        (O.LESS_CONTIGUOUS, O.GREATER_CONTIGUOUS),
        (O.GREATER_DISJOINT, O.LESS_DISJOINT),
        (O.GREATER_CONTIGUOUS, O.LESS_CONTIGUOUS),
        (O.EQUAL, O.EQUAL),
        (O.INTERSECT_LEFT, O.INTERSECT_RIGHT),
        (O.INTERSECT_RIGHT, O.INTERSECT_LEFT),
        (O.CONTAIN_RIGHT, O.SUBSET_RIGHT),
        (O.CONTAIN_LEFT, O.SUBSET_LEFT),
        (O.CONTAIN_ALL, O.SUBSET_ALL),
        (O.SUBSET_RIGHT, O.CONTAIN_RIGHT),
        (O.SUBSET_LEFT, O.CONTAIN_LEFT),
        (O.SUBSET_ALL, O.CONTAIN_ALL),
    ],
)
def test_reverse(ordering, reversed_ordering):
    assert ordering.reverse() == reversed_ordering
    assert ordering.reverse().reverse() == ordering


def test_key_range_contains():
    r = KeyRange(b"k1", b"k3")
    assert r.contains(b"k1")
    assert r.contains(b"k2")
    assert not r.contains(b"k3")
    assert not r.contains(b"k0")


def test_key_range_intersect():
    r = KeyRange(b"k1", b"k3")
    assert r.is_intersect_with(KeyRange(b"k2", b"k4"))
    assert not r.is_intersect_with(KeyRange(b"k3", b"k4"))
    assert not r.is_intersect_with(KeyRange(b"k0", b"k1"))


def test_key_range_compare():
    r = KeyRange(b"k1", b"k3")
    assert r.compare(b"k3") == -1
    assert r.compare(b"k0") == 1
    assert r.compare(b"k1") == 0


def test_key_range_resume_from():
    r = KeyRange(b"k1", b"k3")
    assert r.resume_from(b"k5") == b"k3"
    assert r.resume_from(b"k3") == b""
    assert r.resume_from(b"k2") == b""


def test_key_span_constructors():
    assert KeySpan.from_key(b"k1") == KeySpan(b"k1", b"")
    assert KeySpan.from_range(b"k1", b"k2") == KeySpan(b"k1", b"k2")
    assert KeySpan.from_key_range(KeyRange(b"a", b"b")) == KeySpan(b"a", b"b")
    assert KeySpan.from_key(b"k1").is_single()
    assert not KeySpan.from_range(b"k1", b"k2").is_single()


def test_key_span_ends():
    single = KeySpan.from_key(b"k1")
    ranged = KeySpan.from_range(b"k1", b"k2")
    assert single.end_key() == b"k1"
    assert ranged.end_key() == b"k2"
    assert single.exclusive_end() == b"k1\x00"
    assert ranged.exclusive_end() == b"k2"


def test_key_span_is_before():
    single = KeySpan.from_key(b"k1")
    assert single.is_before(b"k2")
    assert not single.is_before(b"k1")
    ranged = KeySpan.from_range(b"k1", b"k2")
    assert ranged.is_before(b"k2")
    assert not ranged.is_before(b"k10")


def test_key_span_extend_start():
    span = KeySpan.from_range(b"k1", b"k2")
    assert not span.extend_start(b"k10")
    assert span.key == b"k1"
    assert span.extend_start(b"k0")
    assert span.key == b"k0"