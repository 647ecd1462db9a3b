from __future__ import annotations

from collections.abc import Iterable, Iterator

from boggle.grid import ALPHABET, LETTER_A, letter_index


class TrieNode:
    __slots__ = ("children", "word", "index", "branches")

    def __init__(self, index: int):
        self.children: list[TrieNode | None] = [None] * ALPHABET
        self.word: str | None = None
        self.index = index
        self.branches = 0

    @property
    def is_word(self) -> bool:
        return self.word is not None

    def child(self, ch: str) -> TrieNode | None:
        return self.children[letter_index(ch)]


class Trie:
    """26-ary prefix tree over lowercase words.

    Every node is also kept in ``nodes`` and numbered by its position there,
    so per-traversal state (see ``new_seen``) can live outside the tree and
    one tree can be searched any number of times.
    """

    def __init__(self):
        self.nodes: list[TrieNode] = []
        self.root = self._new_node()
        self.word_count = 0

    def _new_node(self) -> TrieNode:
        node = TrieNode(len(self.nodes))
        self.nodes.append(node)
        return node

    @classmethod
    def from_words(cls, words: Iterable[str]) -> Trie:
        trie = cls()
        for word in words:
            trie.insert(word)
        return trie

    def insert(self, word: str) -> TrieNode:
        if not word:
            raise ValueError("cannot insert an empty word")
        codes = [letter_index(ch) for ch in word]
        node = self.root
        for c in codes:
            child = node.children[c]
            if child is None:
                child = self._new_node()
                node.children[c] = child
                node.branches += 1
            node = child
        if node.word is None:
            node.word = word
            self.word_count += 1
        return node

    def find(self, prefix: str) -> TrieNode | None:
        node = self.root
        for ch in prefix:
            if not "a" <= ch <= "z":
                return None
            node = node.children[ord(ch) - LETTER_A]
            if node is None:
                return None
        return node

    def __contains__(self, word: str) -> bool:
        node = self.find(word)
        return node is not None and node.is_word

    def __len__(self) -> int:
        return self.word_count

    @property
    def num_nodes(self) -> int:
        return len(self.nodes)

    def new_seen(self) -> bytearray:
        """Fresh "already reported" flags, one per node."""
        return bytearray(len(self.nodes))

    def words(self) -> Iterator[str]:
        """All stored words in alphabetical order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.word is not None:
                yield node.word
            stack.extend(child for child in reversed(node.children) if child is not None)
