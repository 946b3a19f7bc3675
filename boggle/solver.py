from __future__ import annotations

from boggle.board import Grid
from boggle.trie import Trie, TrieNode

Path = list[tuple[int, int]]


def _matches(word: str, index: int, token: str) -> bool:
    return word.startswith(token, index)


def locate_path(grid: Grid, word: str, min_length: int = 3) -> Path | None:
    """Find a simple path of adjacent cells spelling ``word``.

    Start cells are tried in row-major order and neighbours in a fixed
    direction order; the first complete path is returned. This is some valid
    path, not necessarily the highest scoring one. Returns None when the word
    cannot be traced, is shorter than ``min_length``, or is not plain A-Z.
    """
    if len(word) < min_length or not (word.isascii() and word.isalpha() and word.isupper()):
        return None

    tokens = grid.tokens
    neighbors = grid.neighbors
    target_len = len(word)
    path: list[int] = []

    def dfs(idx: int, index: int, visited: int) -> bool:
        next_index = index + len(tokens[idx])
        path.append(idx)
        if next_index == target_len:
            return True
        for nidx in neighbors[idx]:
            if visited & (1 << nidx):
                continue
            # Only descend into cells that can continue the match
            if not _matches(word, next_index, tokens[nidx]):
                continue
            if dfs(nidx, next_index, visited | (1 << nidx)):
                return True
        path.pop()
        return False

    for start in range(len(tokens)):
        if _matches(word, 0, tokens[start]) and dfs(start, 0, 1 << start):
            return [grid.coord(idx) for idx in path]
    return None


def score_path(grid: Grid, path: Path) -> int:
    return sum(grid.tile(r, c).score for r, c in path)


def enumerate_words(grid: Grid, trie: Trie, min_length: int = 3) -> dict[str, int]:
    """Find every dictionary word on the board using DFS with trie prefix pruning.

    Returns a mapping of word to the best score over all paths that spell it.
    The same word can be traced along different cells (e.g. two E tiles), so
    the maximum is kept rather than the first found.
    """
    found: dict[str, int] = {}
    tiles = grid.cells
    neighbors = grid.neighbors

    def dfs(idx: int, node: TrieNode, word: str, score: int, visited: int):
        tile = tiles[idx]
        current = Trie.step_token(node, tile.token)
        if current is None:
            return

        word += tile.token
        score += tile.score
        if current.is_word and len(word) >= min_length:
            best = found.get(word)
            if best is None or score > best:
                found[word] = score

        if current.has_children():
            for nidx in neighbors[idx]:
                if not (visited & (1 << nidx)):
                    dfs(nidx, current, word, score, visited | (1 << nidx))

    for start in range(len(tiles)):
        dfs(start, trie.root, "", 0, 1 << start)

    return found


def rank_words(found: dict[str, int]) -> list[tuple[str, int]]:
    """Highest score first, then alphabetical."""
    return sorted(found.items(), key=lambda item: (-item[1], item[0]))
