from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Final, Hashable, Iterator, Mapping, MutableMapping, Self


class Absent(Enum):
    """Marker for "no value stored at this coordinate".

    ``ABSENT`` is returned by :meth:`Map2D.get`, :meth:`Map2D.put` and
    :meth:`Map2D.remove` instead of ``None`` so that a stored ``None`` stays
    distinguishable from a missing entry. It is falsy.
    """

    ABSENT = 'ABSENT'

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'ABSENT'

    __str__ = __repr__


ABSENT: Final = Absent.ABSENT


class Map2D[R: Hashable, C: Hashable, V](ABC):
    """
    Two-dimensional map addressed by a row key and a column key.

    A ``Map2D`` can be viewed as a sheet of rows and cells: every value lives
    at a unique ``(row, column)`` coordinate and putting a value at an
    occupied coordinate replaces the previous one. Row and column keys must
    be hashable and must not be ``None``.

    Subclasses implement the abstract contract below. The Python protocol
    methods (``len``, ``in``, item access, iteration and equality) are
    provided here in terms of that contract, the same way
    ``collections.abc.MutableMapping`` derives its mixin methods.

    Notes
    -----
    - Every ``*_view`` method returns a read-only snapshot. Later changes to
      the map are not visible through it.
    - Methods documented as returning ``self`` can be chained.
    - No ordering of rows or columns is guaranteed.

    Examples
    --------
    >>> from map2d import HashMap2D
    >>> m = HashMap2D()
    >>> m.put('A', 1, 2.3)
    ABSENT
    >>> m.get('A', 1)
    2.3
    >>> m['A', 2] = 2.4
    >>> dict(m.row_view('A'))
    {1: 2.3, 2: 2.4}
    """

    # Storage

    @abstractmethod
    def put(self, row: R, column: C, value: V) -> V | Absent:
        """Store ``value`` at ``(row, column)``.

        Parameters
        ----------
        row : R
            Row part of the key.
        column : C
            Column part of the key.
        value : V
            Value to store, ``None`` is allowed.

        Returns
        -------
        V | Absent
            The value previously stored at the coordinate, or ``ABSENT``.

        Raises
        ------
        InvalidKeyError
            When ``row`` or ``column`` is ``None`` or unhashable. Nothing is
            stored in that case.
        """
        raise NotImplementedError()

    @abstractmethod
    def get(self, row: R, column: C) -> V | Absent:
        """Return the value at ``(row, column)`` or ``ABSENT``."""
        raise NotImplementedError()

    @abstractmethod
    def get_or_default(self, row: R, column: C, default: V) -> V:
        """Return the value at ``(row, column)``, or ``default`` when absent."""
        raise NotImplementedError()

    @abstractmethod
    def remove(self, row: R, column: C) -> V | Absent:
        """Remove the value at ``(row, column)``.

        Returns
        -------
        V | Absent
            The removed value, or ``ABSENT`` if the coordinate was empty.
        """
        raise NotImplementedError()

    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError()

    @abstractmethod
    def non_empty(self) -> bool:
        raise NotImplementedError()

    @abstractmethod
    def size(self) -> int:
        """Return the number of stored values (not the number of rows)."""
        raise NotImplementedError()

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError()

    # Views and queries

    @abstractmethod
    def row_view(self, row: R) -> Mapping[C, V]:
        """Return a snapshot of ``row`` as a column -> value mapping.

        An empty mapping is returned when the row holds no values.
        """
        raise NotImplementedError()

    @abstractmethod
    def column_view(self, column: C) -> Mapping[R, V]:
        """Return a snapshot of ``column`` as a row -> value mapping.

        An empty mapping is returned when the column holds no values.
        """
        raise NotImplementedError()

    @abstractmethod
    def has_value(self, value: V) -> bool:
        """Check whether any coordinate holds a value equal to ``value``.

        Equality is ``==``, except that a NaN query finds a stored NaN.
        """
        raise NotImplementedError()

    @abstractmethod
    def has_key(self, row: R, column: C) -> bool:
        raise NotImplementedError()

    @abstractmethod
    def has_row(self, row: R) -> bool:
        raise NotImplementedError()

    @abstractmethod
    def has_column(self, column: C) -> bool:
        raise NotImplementedError()

    @abstractmethod
    def row_map_view(self) -> Mapping[R, Mapping[C, V]]:
        """Return a snapshot of the whole map indexed by row, then column."""
        raise NotImplementedError()

    @abstractmethod
    def column_map_view(self) -> Mapping[C, Mapping[R, V]]:
        """Return a snapshot of the whole map indexed by column, then row."""
        raise NotImplementedError()

    @abstractmethod
    def fill_map_from_row(self, target: MutableMapping[C, V], row: R) -> Self:
        """Copy every column -> value pair of ``row`` into ``target``.

        ``target`` is left untouched when the row holds no values.

        Returns
        -------
        Self
            This map, for chaining.
        """
        raise NotImplementedError()

    @abstractmethod
    def fill_map_from_column(self, target: MutableMapping[R, V], column: C) -> Self:
        """Copy every row -> value pair of ``column`` into ``target``."""
        raise NotImplementedError()

    # Bulk operations

    @abstractmethod
    def put_all(self, source: 'Map2D[R, C, V] | Mapping[R, Mapping[C, V]]') -> Self:
        """Put every value of ``source`` into this map.

        ``source`` is either another ``Map2D`` or a nested row -> column ->
        value mapping. Values at coordinates present in both are replaced.
        ``source`` is never modified.

        Raises
        ------
        InvalidKeyError
            On the first invalid key. Values put before it stay in place.
        """
        raise NotImplementedError()

    @abstractmethod
    def put_all_to_row(self, source: Mapping[C, V], row: R) -> Self:
        """Put every item of ``source`` into ``row``, keys becoming columns."""
        raise NotImplementedError()

    @abstractmethod
    def put_all_to_column(self, source: Mapping[R, V], column: C) -> Self:
        """Put every item of ``source`` into ``column``, keys becoming rows."""
        raise NotImplementedError()

    @abstractmethod
    def copy_with_conversion[R2: Hashable, C2: Hashable, V2](
        self,
        row_function: Callable[[R], R2],
        column_function: Callable[[C], C2],
        value_function: Callable[[V], V2],
    ) -> 'Map2D[R2, C2, V2]':
        """Create a converted copy of this map.

        Every ``(row, column, value)`` becomes ``(row_function(row),
        column_function(column), value_function(value))`` in a new,
        independent map.

        Notes
        -----
        When two source coordinates convert to the same target coordinate
        only one value is kept: the last one written, under an unspecified
        iteration order.
        """
        raise NotImplementedError()

    # Python protocol

    def triples(self) -> Iterator[tuple[R, C, V]]:
        """Iterate over a snapshot of all ``(row, column, value)`` triples."""
        for row, columns in self.row_map_view().items():
            for column, value in columns.items():
                yield row, column, value

    def __iter__(self) -> Iterator[tuple[R, C]]:
        for row, column, _ in self.triples():
            yield row, column

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return self.non_empty()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        return self.has_key(*key)

    def __getitem__(self, key: tuple[R, C]) -> V:
        row, column = _coordinate(key)
        if not self.has_key(row, column):
            raise KeyError(key)
        return self.get(row, column)  # type: ignore[return-value]

    def __setitem__(self, key: tuple[R, C], value: V) -> None:
        row, column = _coordinate(key)
        self.put(row, column, value)

    def __delitem__(self, key: tuple[R, C]) -> None:
        row, column = _coordinate(key)
        if not self.has_key(row, column):
            raise KeyError(key)
        self.remove(row, column)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Map2D):
            return NotImplemented
        return _populated_rows(self) == _populated_rows(other)  # pyright: ignore[reportUnknownArgumentType]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'{type(self).__name__}({_populated_rows(self)!r})'


def _coordinate(key: Any) -> tuple[Any, Any]:
    # Only a (row, column) tuple addresses a value, a 2 character string does not.
    if not isinstance(key, tuple) or len(key) != 2:
        raise KeyError(key)
    return key[0], key[1]


def _populated_rows(map2d: Map2D[Any, Any, Any]) -> dict[Any, dict[Any, Any]]:
    # Empty rows kept around by a non-pruning map do not hold any values.
    return {row: dict(columns) for row, columns in map2d.row_map_view().items() if columns}
