import argparse
import logging
from pathlib import Path
from typing import Any, Mapping

from map2d.base import Map2D
from map2d.config import Map2DSettings, load_settings
from map2d.errors import ConfigError
from map2d.factory import configure, create_instance

_logger = logging.getLogger(__name__)


def default_argparser(description: str = 'map2d demonstration') -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        '-c',
        '--config',
        type=Path,
        default=None,
        help='Optional, path to a settings file (supported extensions: *.json, *.yaml/yml, *.toml)',
    )
    parser.add_argument(
        '-l', '--log-level', type=str, default=None, help='Optional, logging level name.'
    )
    parser.add_argument(
        '--prune-empty-rows',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Drop rows once their last value is removed (default: from settings, else on).',
    )

    return parser


def create_2x2_map() -> Map2D[str, int, float]:
    map2d: Map2D[str, int, float] = create_instance()
    map2d.put('A', 1, 2.3)
    map2d.put('A', 2, 2.4)
    map2d.put('B', 1, 2.5)
    map2d.put('B', 2, 2.6)
    return map2d


def run_demo() -> None:
    """Print the results of a few representative operations."""
    _logger.info('Basic queries')
    map2d = create_2x2_map()
    print('size:', map2d.size())
    print('row A:', _sorted(map2d.row_view('A')))
    print('column 1:', _sorted(map2d.column_view(1)))
    print('has row C:', map2d.has_row('C'))

    _logger.info('Row map view snapshot')
    snapshot = map2d.row_map_view()
    map2d.remove('A', 1)
    print('after remove, get A/1:', map2d.get('A', 1))
    print('after remove, size:', map2d.size())
    print('snapshot row A:', _sorted(snapshot['A']))

    _logger.info('Fill map from row')
    to_fill: dict[int, float] = {}
    create_2x2_map().fill_map_from_row(to_fill, 'A').fill_map_from_row(to_fill, 'C')
    print('filled from rows A and C:', _sorted(to_fill))

    _logger.info('Conversion with colliding rows')
    converted = create_2x2_map().copy_with_conversion(len, str, lambda value: value * 10)
    print('converted size:', converted.size())
    print('converted rows:', sorted(converted.row_map_view()))

    _logger.info('Repeated put')
    repeated: Map2D[int, int, int] = create_instance()
    for _ in range(3):
        repeated.put(1, 2, 3)
    print('repeated put size:', repeated.size())

    _logger.info('Emptied row')
    emptied = create_2x2_map()
    emptied.remove('B', 1)
    emptied.remove('B', 2)
    print('has row B after removing its values:', emptied.has_row('B'))


def _sorted(mapping: Mapping[Any, Any]) -> dict[Any, Any]:
    return dict(sorted(mapping.items()))


def main(argv: list[str] | None = None) -> int:
    parser = default_argparser()
    namespace = parser.parse_args(argv)

    # Only options given on the command line override the settings file.
    overrides = {
        name: getattr(namespace, name)
        for name in ('prune_empty_rows', 'log_level')
        if getattr(namespace, name) is not None
    }

    try:
        settings = load_settings(namespace.config) if namespace.config else Map2DSettings()
        settings = settings.merged(overrides)
    except (ConfigError, FileNotFoundError, RuntimeError) as ex:
        parser.error(str(ex))

    logging.basicConfig(
        level=settings.log_level.upper(), format='%(asctime)s %(name)s %(levelname)s %(message)s'
    )
    configure(settings)
    run_demo()
    return 0
