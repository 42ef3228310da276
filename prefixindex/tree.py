"""
Prefix index — compressed trie with unique-prefix resolution.

Techniques used:
  - Path compression: single-child chains are stored as one edge with a
    multi-character label, so a lookup touches one node per branch point.
  - Sorted edges: edges out of a node are kept in label order, which lets
    insertion binary-search its position and lets large nodes resolve a
    prefix by inspecting only two neighbouring edges.
  - Descendant counts: every node knows how many keys live below it, so
    ambiguity is decided without walking the subtree.
  - Iterative traversal: no method recurses, so the call stack stays
    constant regardless of key length or tree depth.

Complexity (n = prefix length, d = edges per node, m = number of matches):
  insert                      — O(n log d)
  resolve / find_*            — O(n) below the linear-scan limit, O(n log d) above it
  find_all_*                  — O(n + m)
"""

from __future__ import annotations

import bisect
import enum
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Generic, Iterator, TypeVar

V = TypeVar("V")
T = TypeVar("T")

# Nodes with at least this many edges use binary search to pick candidate
# edges during resolution; smaller nodes are scanned linearly.
LINEAR_SCAN_LIMIT = 20

_label = attrgetter("label")


def matching_chars(a: str, b: str) -> int:
    """Return the number of leading characters *a* and *b* share."""
    i = 0
    limit = min(len(a), len(b))
    while i < limit and a[i] == b[i]:
        i += 1
    return i


# ------------------------------------------------------------------
# Outcomes and errors
# ------------------------------------------------------------------


class Outcome(enum.Enum):
    UNIQUE = "unique"
    AMBIGUOUS = "ambiguous"
    NOT_FOUND = "not found"


class PrefixError(LookupError):
    """Base class for the two ways a single-result lookup can fail."""

    outcome: Outcome

    def __init__(self, prefix: str) -> None:
        super().__init__(f"prefix {self.outcome.value}: {prefix!r}")
        self.prefix = prefix


class PrefixNotFound(PrefixError):
    """The prefix matches no stored key."""

    outcome = Outcome.NOT_FOUND


class PrefixAmbiguous(PrefixError):
    """The prefix matches two or more stored keys."""

    outcome = Outcome.AMBIGUOUS


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a single-result lookup: either a value or an error.

    Errors are carried, not raised, so every call site decides what a
    missing or ambiguous prefix means.  Call :meth:`unwrap` to get
    exception semantics instead.

    >>> index = PrefixIndex()
    >>> index.insert("status", 1)
    >>> index.find_unique("st").unwrap()
    1
    >>> index.find_unique("x").ok
    False
    """

    value: T | None = None
    error: PrefixError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def outcome(self) -> Outcome:
        return Outcome.UNIQUE if self.error is None else self.error.outcome

    def unwrap(self) -> T:
        """Return the value, or raise the carried :class:`PrefixError`."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def __bool__(self) -> bool:
        return self.ok


# ------------------------------------------------------------------
# Tree model
# ------------------------------------------------------------------


@dataclass
class Node(Generic[V]):
    """A branch point or key endpoint in the compressed trie.

    ``stored_key`` is ``None`` for pure branch points; the empty string is a
    valid stored key (it lives on the root).
    """

    stored_key: str | None = None
    value: V | None = None
    edges: list[Edge[V]] = field(default_factory=list)
    descendant_count: int = 0

    @property
    def terminal(self) -> bool:
        return self.stored_key is not None


@dataclass
class Edge(Generic[V]):
    """A labelled link to an exclusively owned child node."""

    label: str
    target: Node[V]


class PrefixIndex(Generic[V]):
    """A compressed prefix tree resolving keys by their shortest unique prefix.

    >>> index = PrefixIndex()
    >>> for key, value in [("apple", 1), ("applepie", 2), ("a", 3), ("armor", 4)]:
    ...     index.insert(key, value)
    >>> index.find_unique("a").value
    3
    >>> index.find_unique("ap").outcome
    <Outcome.AMBIGUOUS: 'ambiguous'>
    >>> index.find_all_keys("ap")
    ['apple', 'applepie']
    """

    def __init__(self, linear_scan_limit: int = LINEAR_SCAN_LIMIT) -> None:
        self._root: Node[V] = Node()
        self.linear_scan_limit = linear_scan_limit

    @property
    def root(self) -> Node[V]:
        return self._root

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def insert(self, key: str, value: V) -> None:
        """Associate *value* with *key*, replacing any previous value."""
        if not isinstance(key, str):
            raise TypeError(f"key must be str, not {type(key).__name__}")
        node = self._root
        rest = key
        # Counts are bumped only once we know the key is new.
        path: list[Node[V]] = []
        while True:
            path.append(node)

            if not rest:
                if node.terminal:
                    node.value = value
                    return
                node.stored_key, node.value = key, value
                break

            edges = node.edges
            ix = bisect.bisect_left(edges, rest, key=_label)

            # Siblings never share a first character, so only the edges on
            # either side of the insertion point can overlap *rest*.
            split_edge: Edge[V] | None = None
            split_at = 0
            descended = False
            for edge in edges[max(ix - 1, 0) : ix + 1]:
                m = matching_chars(edge.label, rest)
                if m == len(edge.label):
                    node, rest = edge.target, rest[m:]
                    descended = True
                    break
                if m > 0:
                    split_edge, split_at = edge, m
                    break
            if descended:
                continue

            if split_edge is None:
                leaf = Node(stored_key=key, value=value, descendant_count=1)
                edges.insert(ix, Edge(rest, leaf))
                break

            # Partial match: route the edge through a new branch node and
            # keep placing the key from there.
            old = split_edge.target
            branch: Node[V] = Node(
                edges=[Edge(split_edge.label[split_at:], old)],
                descendant_count=old.descendant_count,
            )
            split_edge.label = split_edge.label[:split_at]
            split_edge.target = branch
            node, rest = branch, rest[split_at:]

        for visited in path:
            visited.descendant_count += 1

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, prefix: str) -> tuple[Node[V] | None, Outcome]:
        """Walk *prefix* down the tree and classify where it lands."""
        node = self._root
        rest = prefix
        while True:
            if not rest:
                if node.terminal:
                    return node, Outcome.UNIQUE
                return node, Outcome.AMBIGUOUS

            next_node: Node[V] | None = None
            for edge in self._candidates(node, rest):
                m = matching_chars(rest, edge.label)
                if m == 0:
                    continue
                if m == len(edge.label):
                    next_node, rest = edge.target, rest[m:]
                    break
                if m == len(rest):
                    target = edge.target
                    if target.descendant_count > 1:
                        return target, Outcome.AMBIGUOUS
                    if target.terminal:
                        return target, Outcome.UNIQUE
                    # A lone descendant is always the node itself.
                    return None, Outcome.NOT_FOUND
                return None, Outcome.NOT_FOUND
            if next_node is None:
                return None, Outcome.NOT_FOUND
            node = next_node

    def _candidates(self, node: Node[V], rest: str) -> list[Edge[V]]:
        edges = node.edges
        if len(edges) < self.linear_scan_limit:
            return edges
        ix = bisect.bisect_left(edges, rest, key=_label)
        return edges[max(ix - 1, 0) : ix + 1]

    # ------------------------------------------------------------------
    # Single-result lookups
    # ------------------------------------------------------------------

    def _unique(self, prefix: str) -> tuple[Node[V] | None, PrefixError | None]:
        node, outcome = self.resolve(prefix)
        if outcome is Outcome.UNIQUE:
            return node, None
        if outcome is Outcome.AMBIGUOUS:
            return None, PrefixAmbiguous(prefix)
        return None, PrefixNotFound(prefix)

    def find_unique(self, prefix: str) -> Result[V]:
        """Return the value of the one key *prefix* identifies."""
        node, error = self._unique(prefix)
        if node is None:
            return Result(error=error)
        return Result(value=node.value)

    def find_key(self, prefix: str) -> Result[str]:
        """Return the full key *prefix* identifies."""
        node, error = self._unique(prefix)
        if node is None:
            return Result(error=error)
        return Result(value=node.stored_key)

    def find_key_value(self, prefix: str) -> Result[tuple[str, V]]:
        node, error = self._unique(prefix)
        if node is None:
            return Result(error=error)
        return Result(value=(node.stored_key, node.value))

    # ------------------------------------------------------------------
    # Multi-result lookups
    # ------------------------------------------------------------------

    def _matches(self, prefix: str) -> Iterator[Node[V]]:
        node, outcome = self.resolve(prefix)
        if outcome is Outcome.NOT_FOUND:
            return
        if outcome is Outcome.UNIQUE:
            yield node
            return
        yield from _terminals(node)

    def find_all_values(self, prefix: str) -> list[V]:
        return [node.value for node in self._matches(prefix)]

    def find_all_keys(self, prefix: str) -> list[str]:
        """Return every key *prefix* could stand for, in ascending order.

        An exact match counts as unique: ``find_all_keys("app")`` is
        ``["app"]`` even when ``"apple"`` is also stored.
        """
        return [node.stored_key for node in self._matches(prefix)]

    def find_all_key_values(self, prefix: str) -> list[tuple[str, V]]:
        return [(node.stored_key, node.value) for node in self._matches(prefix)]

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def items(self) -> Iterator[tuple[str, V]]:
        """Yield every ``(key, value)`` pair in ascending key order."""
        for node in _terminals(self._root):
            yield node.stored_key, node.value

    def __len__(self) -> int:
        return self._root.descendant_count

    def __contains__(self, key: Any) -> bool:
        if not isinstance(key, str):
            return False
        node, outcome = self.resolve(key)
        return outcome is Outcome.UNIQUE and node.stored_key == key

    def __iter__(self) -> Iterator[str]:
        for node in _terminals(self._root):
            yield node.stored_key


def _terminals(start: Node[V]) -> Iterator[Node[V]]:
    """Yield the terminal nodes under *start* (inclusive) in key order."""
    stack = [start]
    while stack:
        current = stack.pop()
        if current.terminal:
            yield current
        for edge in reversed(current.edges):
            stack.append(edge.target)


# ------------------------------------------------------------------
# Quick demo
# ------------------------------------------------------------------

if __name__ == "__main__":
    index: PrefixIndex[int] = PrefixIndex()
    for i, word in enumerate(["apple", "orange", "apple pie", "lemon meringue", "lemon"]):
        index.insert(word, i)

    print(f"{'prefix':<18} {'data':<8} error")
    print(f"{'------':<18} {'----':<8} -----")
    for prefix in [
        "a", "appl", "apple", "apple p", "apple pie", "apple pies",
        "o", "orang", "orange", "oranges",
        "lemo", "lemon", "lemon m", "lemon meringue", "lemon meringues",
    ]:
        result = index.find_unique(prefix)
        print(f"{prefix:<18} {result.value!s:<8} {result.error or ''}")

    print(f"\nfind_all_keys('a')    → {index.find_all_keys('a')}")
    print(f"find_all_keys('lemo') → {index.find_all_keys('lemo')}")
