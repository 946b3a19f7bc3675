from __future__ import annotations

from typing import Iterable

LETTER_A = ord("A")


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self):
        self.children: list[TrieNode | None] = [None] * 26
        self.is_word: bool = False

    def step(self, ch: str) -> TrieNode | None:
        idx = ord(ch) - LETTER_A
        if 0 <= idx < 26:
            return self.children[idx]
        return None

    def has_children(self) -> bool:
        return any(child is not None for child in self.children)


class Trie:
    def __init__(self):
        self.root = TrieNode()
        self._count = 0

    def insert(self, word: str):
        node = self.root
        for ch in word:
            idx = ord(ch) - LETTER_A
            if not 0 <= idx < 26:
                raise ValueError(f"Cannot insert {word!r}: only A-Z allowed")
            if node.children[idx] is None:
                node.children[idx] = TrieNode()
            node = node.children[idx]
        if not node.is_word:
            node.is_word = True
            self._count += 1

    @staticmethod
    def step_token(node: TrieNode, token: str) -> TrieNode | None:
        """Step a whole tile token. "QU" needs both edges or the step fails."""
        for ch in token:
            node = node.step(ch)
            if node is None:
                return None
        return node

    def __contains__(self, word: str) -> bool:
        node = self.step_token(self.root, word)
        return node is not None and node.is_word

    def __len__(self) -> int:
        return self._count


def build_trie(words: Iterable[str]) -> Trie:
    trie = Trie()
    for word in words:
        trie.insert(word)
    return trie
