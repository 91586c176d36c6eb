class Map2DError(Exception):
    """Base class for all errors raised by ``map2d``."""


class InvalidKeyError(Map2DError, ValueError):
    """Raised when a row or column key is ``None`` or cannot be hashed."""

    def __init__(self, part: str, key: object) -> None:
        super().__init__(f'Invalid {part} key: {key!r}')
        self.part = part
        self.key = key


class ConfigError(Map2DError):
    """Raised when a settings mapping holds unknown keys or badly typed values."""
