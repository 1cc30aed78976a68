"""Exact cover via Knuth's Algorithm X with Dancing Links.

Generic solver, no Mahjong knowledge. The toroidal sparse matrix is kept in
an arena: every node is an integer index into parallel link arrays, so cover
and uncover are pure index relinking.

Node layout:
    0               root
    1..n_columns    column headers (header for column c is node c + 1)
    n_columns+1..   one node per 1-entry of the incidence matrix
"""

from typing import Collection, FrozenSet, List, Sequence

ROOT = 0


class ExactCoverSolver:
    """Dancing Links matrix for one exact-cover instance.

    Args:
        rows: For each row, the set of column ids it covers
        n_columns: Number of columns; the universe is {0, ..., n_columns - 1}

    Raises:
        ValueError: If n_columns is negative or a row references a column
            outside the universe.
    """

    def __init__(self, rows: Sequence[Collection[int]], n_columns: int):
        _validate(rows, n_columns)
        self.n_columns = n_columns
        self.n_rows = len(rows)

        n_headers = n_columns + 1
        self.left: List[int] = []
        self.right: List[int] = []
        self.up: List[int] = []
        self.down: List[int] = []
        self.column: List[int] = []
        self.row: List[int] = []
        # Live node count per column header (index 0 unused)
        self.size: List[int] = [0] * n_headers

        # Root and column headers form the horizontal header ring
        for node in range(n_headers):
            self.left.append((node - 1) % n_headers)
            self.right.append((node + 1) % n_headers)
            self.up.append(node)
            self.down.append(node)
            self.column.append(node)
            self.row.append(-1)

        for row_id, cols in enumerate(rows):
            self._append_row(row_id, sorted(set(cols)))

    def _new_node(self, header: int, row_id: int) -> int:
        node = len(self.left)
        self.left.append(node)
        self.right.append(node)
        # Insert at the bottom of the column
        last = self.up[header]
        self.up.append(last)
        self.down.append(header)
        self.down[last] = node
        self.up[header] = node
        self.column.append(header)
        self.row.append(row_id)
        self.size[header] += 1
        return node

    def _append_row(self, row_id: int, cols: List[int]):
        first = None
        for col in cols:
            node = self._new_node(col + 1, row_id)
            if first is None:
                first = node
                continue
            # Link into the row ring just left of the first node
            last = self.left[first]
            self.left[node] = last
            self.right[node] = first
            self.right[last] = node
            self.left[first] = node

    def cover(self, header: int):
        """Remove a column and every row that intersects it."""
        left, right, up, down = self.left, self.right, self.up, self.down
        right[left[header]] = right[header]
        left[right[header]] = left[header]
        i = down[header]
        while i != header:
            j = right[i]
            while j != i:
                down[up[j]] = down[j]
                up[down[j]] = up[j]
                self.size[self.column[j]] -= 1
                j = right[j]
            i = down[i]

    def uncover(self, header: int):
        """Exact inverse of cover; must be called in reverse cover order."""
        left, right, up, down = self.left, self.right, self.up, self.down
        i = up[header]
        while i != header:
            j = left[i]
            while j != i:
                self.size[self.column[j]] += 1
                down[up[j]] = j
                up[down[j]] = j
                j = left[j]
            i = up[i]
        right[left[header]] = header
        left[right[header]] = header

    def choose_column(self) -> int:
        """Live column with the fewest rows; lowest column id on ties."""
        best = self.right[ROOT]
        header = self.right[best]
        while header != ROOT:
            if self.size[header] < self.size[best]:
                best = header
            header = self.right[header]
        return best

    def solve(self) -> List[FrozenSet[int]]:
        """Return every exact cover, as sets of row indices, in discovery order."""
        solutions: List[FrozenSet[int]] = []
        self._search([], solutions)
        return solutions

    def _search(self, partial: List[int], solutions: List[FrozenSet[int]]):
        if self.right[ROOT] == ROOT:
            solutions.append(frozenset(partial))
            return

        header = self.choose_column()
        if self.size[header] == 0:
            return

        self.cover(header)
        r = self.down[header]
        while r != header:
            partial.append(self.row[r])
            j = self.right[r]
            while j != r:
                self.cover(self.column[j])
                j = self.right[j]

            self._search(partial, solutions)

            partial.pop()
            j = self.left[r]
            while j != r:
                self.uncover(self.column[j])
                j = self.left[j]
            r = self.down[r]
        self.uncover(header)


def _validate(rows: Sequence[Collection[int]], n_columns: int):
    if n_columns < 0:
        raise ValueError(f"n_columns must be non-negative, got {n_columns}")
    for row_id, cols in enumerate(rows):
        for col in cols:
            if not isinstance(col, int) or not (0 <= col < n_columns):
                raise ValueError(
                    f"row {row_id} references column {col!r}, "
                    f"expected 0..{n_columns - 1}")


def find_exact_covers(rows: Sequence[Collection[int]], n_columns: int) -> List[FrozenSet[int]]:
    """Every subset of row indices whose rows partition {0, ..., n_columns - 1}."""
    return ExactCoverSolver(rows, n_columns).solve()
