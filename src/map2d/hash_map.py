import math
from logging import Logger, getLogger
from types import MappingProxyType
from typing import Any, Callable, Hashable, Mapping, MutableMapping, Self

from map2d.base import ABSENT, Absent, Map2D
from map2d.errors import InvalidKeyError

_NO_COLUMNS: Mapping[Any, Any] = MappingProxyType({})


class HashMap2D[R: Hashable, C: Hashable, V](Map2D[R, C, V]):
    """
    Default ``Map2D`` implementation backed by a dict of dicts.

    Every row owns an inner dictionary mapping column keys to values. Rows
    are created by the first ``put`` into them. Column based operations scan
    every row, there is no secondary column index.

    Parameters
    ----------
    prune_empty_rows : bool, optional
        When true (the default) a row is dropped as soon as its last value is
        removed. When false the emptied row is kept, so ``has_row`` and
        ``row_map_view`` keep reporting it with no columns until ``clear``.
    logger : Logger | None, optional
        Logger used for bulk operation and conversion diagnostics. Defaults
        to the module logger.

    Attributes
    ----------
    _rows : dict[R, dict[C, V]]
        Internal storage. Users should treat this as private and go through
        the ``Map2D`` interface.
    """

    _rows: dict[R, dict[C, V]]
    _logger: Logger
    prune_empty_rows: bool

    def __init__(self, prune_empty_rows: bool = True, logger: Logger | None = None) -> None:
        self._rows = {}
        self.prune_empty_rows = prune_empty_rows
        self._logger = logger or getLogger(__name__)

    # Storage

    def put(self, row: R, column: C, value: V) -> V | Absent:
        # Keys are validated before any row is created.
        _check_key('row', row)
        _check_key('column', column)

        columns = self._rows.setdefault(row, {})
        previous = columns.get(column, ABSENT)
        columns[column] = value
        return previous

    def get(self, row: R, column: C) -> V | Absent:
        return self._rows.get(row, _NO_COLUMNS).get(column, ABSENT)

    def get_or_default(self, row: R, column: C, default: V) -> V:
        value = self.get(row, column)
        if value is ABSENT:
            return default
        return value

    def remove(self, row: R, column: C) -> V | Absent:
        columns = self._rows.get(row)
        if columns is None:
            return ABSENT

        previous = columns.pop(column, ABSENT)
        if not columns and self.prune_empty_rows:
            del self._rows[row]
        return previous

    def is_empty(self) -> bool:
        return not any(self._rows.values())

    def non_empty(self) -> bool:
        return not self.is_empty()

    def size(self) -> int:
        return sum(len(columns) for columns in self._rows.values())

    def clear(self) -> None:
        self._logger.debug('Clearing %d values in %d rows', self.size(), len(self._rows))
        self._rows.clear()

    # Views and queries

    def row_view(self, row: R) -> Mapping[C, V]:
        return MappingProxyType(dict(self._rows.get(row, _NO_COLUMNS)))

    def column_view(self, column: C) -> Mapping[R, V]:
        return MappingProxyType(
            {row: columns[column] for row, columns in self._rows.items() if column in columns}
        )

    def has_value(self, value: V) -> bool:
        return any(
            _same_value(stored, value)
            for columns in self._rows.values()
            for stored in columns.values()
        )

    def has_key(self, row: R, column: C) -> bool:
        return column in self._rows.get(row, _NO_COLUMNS)

    def has_row(self, row: R) -> bool:
        return row in self._rows

    def has_column(self, column: C) -> bool:
        return any(column in columns for columns in self._rows.values())

    def row_map_view(self) -> Mapping[R, Mapping[C, V]]:
        return MappingProxyType(
            {row: MappingProxyType(dict(columns)) for row, columns in self._rows.items()}
        )

    def column_map_view(self) -> Mapping[C, Mapping[R, V]]:
        result: dict[C, Mapping[R, V]] = {}
        for columns in self._rows.values():
            for column in columns:
                if column not in result:
                    result[column] = self.column_view(column)
        return MappingProxyType(result)

    def fill_map_from_row(self, target: MutableMapping[C, V], row: R) -> Self:
        target.update(self.row_view(row))
        return self

    def fill_map_from_column(self, target: MutableMapping[R, V], column: C) -> Self:
        target.update(self.column_view(column))
        return self

    # Bulk operations

    def put_all(self, source: Map2D[R, C, V] | Mapping[R, Mapping[C, V]]) -> Self:
        # Snapshot first, `source` may be this very map.
        rows = source.row_map_view() if isinstance(source, Map2D) else source
        self._logger.debug('Putting %d source rows', len(rows))

        for row, columns in rows.items():
            for column, value in columns.items():
                self.put(row, column, value)
        return self

    def put_all_to_row(self, source: Mapping[C, V], row: R) -> Self:
        self._logger.debug('Putting %d values into row %r', len(source), row)
        for column, value in source.items():
            self.put(row, column, value)
        return self

    def put_all_to_column(self, source: Mapping[R, V], column: C) -> Self:
        self._logger.debug('Putting %d values into column %r', len(source), column)
        for row, value in source.items():
            self.put(row, column, value)
        return self

    def copy_with_conversion[R2: Hashable, C2: Hashable, V2](
        self,
        row_function: Callable[[R], R2],
        column_function: Callable[[C], C2],
        value_function: Callable[[V], V2],
    ) -> 'HashMap2D[R2, C2, V2]':
        result: HashMap2D[R2, C2, V2] = type(self)(
            prune_empty_rows=self.prune_empty_rows, logger=self._logger
        )

        collisions = 0
        for row, column, value in self.triples():
            new_row, new_column = row_function(row), column_function(column)
            previous = result.put(new_row, new_column, value_function(value))
            if previous is not ABSENT:
                # Last write wins.
                collisions += 1
                self._logger.debug(
                    'Conversion of (%r, %r) collides at (%r, %r), replacing %r',
                    row,
                    column,
                    new_row,
                    new_column,
                    previous,
                )

        if collisions:
            self._logger.debug('Conversion merged %d colliding values', collisions)
        return result


def _same_value(stored: Any, value: Any) -> bool:
    # NaN never equals itself, a stored NaN is still found by a NaN query.
    if stored is value or stored == value:
        return True
    return _is_nan(stored) and _is_nan(value)


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _check_key(part: str, key: Any) -> None:
    if key is None:
        raise InvalidKeyError(part, key)
    try:
        hash(key)
    except TypeError as ex:
        raise InvalidKeyError(part, key) from ex
