"""Custom exceptions for sprite packing operations"""


class SpritePackerError(Exception):
    """Base exception for sprite packer errors"""
    pass


class SpriteLoadError(SpritePackerError):
    """A sprite file could not be decoded"""
    pass


class PaletteError(SpritePackerError):
    """Reference palette image is missing or not palettised"""
    pass


class ConfigError(SpritePackerError):
    """Invalid settings file or values"""
    pass
