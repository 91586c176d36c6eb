# pyright: reportUnusedImport=false
from map2d.base import ABSENT, Absent, Map2D
from map2d.config import Map2DSettings, load_config_file, load_settings
from map2d.errors import ConfigError, InvalidKeyError, Map2DError
from map2d.factory import configure, create_instance, reset_implementation, use_implementation
from map2d.hash_map import HashMap2D

__all__ = [
    'ABSENT',
    'Absent',
    'ConfigError',
    'HashMap2D',
    'InvalidKeyError',
    'Map2D',
    'Map2DError',
    'Map2DSettings',
    'configure',
    'create_instance',
    'load_config_file',
    'load_settings',
    'reset_implementation',
    'use_implementation',
]
