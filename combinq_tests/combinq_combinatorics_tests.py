import math
from collections import namedtuple
import numpy as np
import suite
from sgen import from_seed, source_from, SOURCE_KINDS
from combinq import (
    permutations, combinations, combinations_with_replacement, tuple_combinations,
    cartesian_product, capture, CaptureConfig
)

# --- setup ---
test = suite.test
cases = suite.cases
assert_that = suite.assert_that
assert_raises = suite.assert_raises

gen = from_seed(42)

# --- test data & helpers ---
simple_list = ['a', 'b', 'c']
numeric_list = [10, 20, 30, 40]
list_with_dupes = ['x', 'y', 'x']
empty_list = []
dict_list = [{'id': 1}, {'id': 2}]  # unhashable

Pair = namedtuple('Pair', ['first', 'second'])
Triple = namedtuple('Triple', ['a', 'b', 'c'])

def positions(groups, values):
    """map value tuples back to the positions they were drawn from (values are distinct)"""
    where = {v: i for i, v in enumerate(values)}
    return [tuple(where[v] for v in group) for group in groups]

def failing_source(good_items, error):
    for item in good_items:
        yield item
    raise error

# random (kind, n, k) triples over every source kind
random_cases = list(gen.cases(40, max_n=6))


# --- scenario ---

@test("combinations of [1, 2, 3] choose 2 are emitted in lexicographic order")
def test_combinations_scenario():
    assert_that(list(combinations([1, 2, 3], 2)) == [(1, 2), (1, 3), (2, 3)], "3c2 order is a hard contract")


@test("permutations of [1, 2, 3] take 2 are the six ordered pairs")
def test_permutations_scenario():
    perms = list(permutations([1, 2, 3], 2))
    expected = {(1, 2), (1, 3), (2, 1), (2, 3), (3, 1), (3, 2)}
    assert_that(len(perms) == 6, "3p2 should yield 6 pairs")
    assert_that(set(perms) == expected, "3p2 content is incorrect")
    assert_that(perms == list(permutations([1, 2, 3], 2)), "order is deterministic across runs")


# --- counts and ordering over every source kind ---

@test("permutations yield n!/(n-k)! distinct tuples for every source kind")
@cases(*random_cases)
def test_permutation_counts(kind, n, k):
    values = gen.values_for(kind, n)
    perms = list(permutations(source_from(kind, values), k))
    expected = math.perm(n, k) if k <= n else 0
    assert_that(len(perms) == expected, f"expected {expected} permutations")
    assert_that(len(set(perms)) == len(perms), "no permutation may repeat")
    index_tuples = positions(perms, values)
    assert_that(index_tuples == sorted(index_tuples), "permutations come in index order")


@test("combinations yield C(n, k) strictly increasing tuples in lexicographic order")
@cases(*random_cases)
def test_combination_counts(kind, n, k):
    values = gen.values_for(kind, n)
    combs = list(combinations(source_from(kind, values), k))
    assert_that(len(combs) == math.comb(n, k), f"expected C({n}, {k}) combinations")
    index_tuples = positions(combs, values)
    assert_that(all(list(t) == sorted(set(t)) for t in index_tuples), "indices strictly increase")
    assert_that(index_tuples == sorted(index_tuples), "combinations come in lexicographic order")


@test("combinations_with_replacement yield C(n+k-1, k) non-decreasing tuples")
@cases(*random_cases)
def test_replacement_counts(kind, n, k):
    values = gen.values_for(kind, n)
    combs = list(combinations_with_replacement(source_from(kind, values), k))
    expected = math.comb(n + k - 1, k) if n else int(k == 0)
    assert_that(len(combs) == expected, f"expected {expected} combinations with replacement")
    index_tuples = positions(combs, values)
    assert_that(all(list(t) == sorted(t) for t in index_tuples), "indices never decrease")
    assert_that(index_tuples == sorted(index_tuples), "lexicographic order")


# --- boundaries ---

@test("k=0 yields exactly one empty group for every adaptor, even on an empty source")
def test_zero_k():
    for source in (simple_list, empty_list):
        assert_that(list(permutations(source, 0)) == [()], "permutations with k=0")
        assert_that(list(combinations(source, 0)) == [()], "combinations with k=0")
        assert_that(list(combinations_with_replacement(source, 0)) == [()], "cwr with k=0")
        assert_that(list(tuple_combinations(source, 0)) == [()], "tuple_combinations with arity 0")
    assert_that(list(cartesian_product()) == [()], "product of nothing is one empty tuple")


@test("an empty source with k > 0 yields nothing from every adaptor")
@cases(*[(kind,) for kind in SOURCE_KINDS])
def test_empty_source(kind):
    assert_that(list(permutations(gen.source(kind, 0), 2)) == [], "permutations of nothing")
    assert_that(list(combinations(gen.source(kind, 0), 1)) == [], "combinations of nothing")
    assert_that(list(combinations_with_replacement(gen.source(kind, 0), 3)) == [], "cwr of nothing")
    assert_that(list(tuple_combinations(gen.source(kind, 0))) == [], "pairs of nothing")
    assert_that(list(cartesian_product([1, 2], gen.source(kind, 0))) == [], "product with an empty side")


@test("k > n: combinations and permutations are empty, with replacement stays valid")
def test_k_greater_than_n():
    assert_that(list(combinations(numeric_list, 5)) == [], "combinations with k > n are empty")
    assert_that(list(permutations(numeric_list, 5)) == [], "permutations with k > n are empty")
    cwr = list(combinations_with_replacement([1, 2], 3))
    assert_that(cwr == [(1, 1, 1), (1, 1, 2), (1, 2, 2), (2, 2, 2)], "cwr repeats elements past n")


@test("negative k yields nothing")
def test_negative_k():
    assert_that(list(permutations(simple_list, -1)) == [], "permutations with k < 0")
    assert_that(list(combinations(simple_list, -1)) == [], "combinations with k < 0")
    assert_that(list(combinations_with_replacement(simple_list, -1)) == [], "cwr with k < 0")


@test("permutations without k arrange every element")
def test_full_permutations():
    perms = list(permutations(simple_list))
    assert_that(len(perms) == 6, "3! permutations")
    assert_that(perms[0] == ('a', 'b', 'c') and perms[-1] == ('c', 'b', 'a'), "first and last by index")


@test("permutations treat duplicate values by position")
def test_permutations_with_duplicates():
    perms = list(permutations(list_with_dupes, 2))
    assert_that(len(perms) == 6, "3p2 counts positions, not values")
    assert_that(perms.count(('x', 'x')) == 2, "('x', 'x') appears once per position pair")


# --- tuple combinations ---

@test("tuple_combinations unpack into the group type")
def test_tuple_combinations():
    pairs = list(tuple_combinations([1, 2, 3], Pair))
    assert_that(pairs == [Pair(1, 2), Pair(1, 3), Pair(2, 3)], "pairs in lexicographic order")
    assert_that(all(isinstance(p, Pair) for p in pairs), "every group is a Pair")
    assert_that(pairs[0].second == 2, "fields are accessible by name")

    triples = list(tuple_combinations(range(4), Triple))
    assert_that(len(triples) == 4 and triples[-1] == Triple(1, 2, 3), "4c3 as Triples")
    assert_that(list(tuple_combinations('abc', 3)) == [('a', 'b', 'c')], "int arity gives plain tuples")
    assert_that(list(tuple_combinations('abcd')) == list(combinations('abcd', 2)), "default arity is 2")


@test("tuple_combinations reject group types without a fixed arity")
def test_tuple_combinations_bad_group():
    with assert_raises(TypeError):
        tuple_combinations([1, 2], 'pair')
    with assert_raises(TypeError):
        tuple_combinations([1, 2], tuple)
    with assert_raises(TypeError):
        tuple_combinations([1, 2], True)


# --- adaptor behaviour ---

@test("len() reports the remaining count and shrinks as elements are pulled")
def test_len_tracks_remaining():
    combs = combinations(range(5), 2)
    assert_that(len(combs) == 10, "5c2 = 10 before pulling")
    next(combs)
    next(combs)
    assert_that(len(combs) == 8, "two pulled, eight remain")
    assert_that(len(list(combs)) == 8, "list() drains the rest")
    assert_that(len(combs) == 0, "nothing remains")


@test("exhaustion is terminal")
def test_exhaustion_is_terminal():
    perms = permutations([1], 1)
    assert_that(next(perms) == (1,), "single permutation")
    for _ in range(3):
        with assert_raises(StopIteration):
            next(perms)


@test("a source failing mid-capture propagates and leaves the adaptor exhausted")
def test_capture_failure_exhausts():
    combs = combinations(failing_source([1, 2], KeyError('producer broke')), 2)
    with assert_raises(KeyError):
        next(combs)
    with assert_raises(StopIteration):
        next(combs)
    with assert_raises(StopIteration):
        combs.next_back()
    assert_that(len(combs) == 0, "no elements after a failed capture")


@test("an interrupt mid-capture leaves the adaptor exhausted instead of half-captured")
def test_interrupted_capture_exhausts():
    def interrupted():
        yield 1
        yield 2
        raise KeyboardInterrupt

    combs = combinations(interrupted(), 2)
    with assert_raises(KeyboardInterrupt):
        next(combs)
    with assert_raises(StopIteration):
        next(combs)
    assert_that(combs.remaining() == 0 and not combs, "nothing remains after the interrupt")


@test("remaining() and truthiness stay exact past the range of len()")
def test_counts_beyond_index_size():
    perms = permutations(range(25))
    assert_that(perms.remaining() == math.factorial(25), "25! permutations remain")
    assert_that(bool(perms), "a huge adaptor is truthy")
    with assert_raises(OverflowError):
        len(perms)
    combs = combinations(range(100), 50)
    next(combs)
    assert_that(combs.remaining() == math.comb(100, 50) - 1, "one pulled from 100c50")
    reps = combinations_with_replacement(range(60), 30)
    assert_that(reps.remaining() == math.comb(89, 30), "multiset count is unbounded too")
    assert_that(not permutations([], 1), "an empty adaptor is falsy")


@test("eager capture surfaces source faults at construction")
def test_eager_capture_failure():
    with assert_raises(KeyError):
        permutations(failing_source([1], KeyError('early')), 1, config=CaptureConfig(eager=True))


@test("adaptors can share one captured buffer read-only")
def test_shared_buffer():
    buffer = capture(x for x in [1, 2, 3])
    assert_that(list(combinations(buffer, 2)) == [(1, 2), (1, 3), (2, 3)], "first adaptor over the buffer")
    assert_that(len(list(permutations(buffer, 2))) == 6, "second adaptor sees the same elements")


@test("combinatorics work with unhashable elements and numpy sources")
def test_complex_types():
    perms = list(permutations(dict_list, 2))
    assert_that(({'id': 1}, {'id': 2}) in perms and ({'id': 2}, {'id': 1}) in perms, "dict permutations")
    combs = list(combinations(np.array([1, 2, 3]), 2))
    assert_that(combs == [(1, 2), (1, 3), (2, 3)], "numpy sources yield native values")
    assert_that(all(type(v) is int for group in combs for v in group), "elements are python ints")


# --- run the suite ---
if __name__ == "__main__":
    suite.run(title="combinq combinatorics test")
