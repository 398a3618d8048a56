"""
Pillow-backed I/O around the packer.

Sprite discovery and loading, palette extraction, compositing and PNG output.
"""
from .source import Sprite, find_sprite_files, load_sprite, load_sprites
from .palette import load_color_map, color_map_from_image, flatten_color_map
from .compositor import compose_atlas, save_atlas

__all__ = [
    'Sprite',
    'find_sprite_files',
    'load_sprite',
    'load_sprites',
    'load_color_map',
    'color_map_from_image',
    'flatten_color_map',
    'compose_atlas',
    'save_atlas',
]
