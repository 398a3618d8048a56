from .manifest import AtlasManifest, SpriteEntry, FailureEntry, build_manifest

__all__ = ['AtlasManifest', 'SpriteEntry', 'FailureEntry', 'build_manifest']
