"""
SpritePacker CLI - Command-line interface for building sprite atlases
"""

import click
import logging
import sys
from pathlib import Path
from spritepacker.client import AtlasResult, SpritePacker
from spritepacker.config import PackerSettings
from spritepacker.exceptions import SpritePackerError


def _configure_logging(verbose):
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def _settings_from_options(config, extension, max_size, max_images, max_width, pow2_height, no_manifest):
    settings = PackerSettings.from_file(config) if config else PackerSettings()
    return settings.with_overrides(
        extension=extension,
        max_sprite_size=max_size,
        max_images=max_images,
        max_width=max_width,
        pow2_height=True if pow2_height else None,
        write_manifest=False if no_manifest else None,
    )


def _fail(message, verbose=False, show_traceback=False):
    click.secho(message, fg='red', err=True)
    if verbose and show_traceback:
        import traceback
        traceback.print_exc()
    sys.exit(1)


_shared_options = [
    click.option('--extension', default=None, help='Sprite file extension to collect (default: .bmp)'),
    click.option('--max-size', type=int, default=None, help='Skip sprites whose width or height is >= this (default: 256)'),
    click.option('--max-images', type=int, default=None, help='Stop after this many sprites (default: 1024)'),
    click.option('--max-width', type=int, default=None, help='Widest atlas allowed, rounded down to a power of two; wider sprites fail (default: 8192)'),
    click.option('--pow2-height', is_flag=True, help='Round atlas height up to a power of two'),
    click.option('--config', 'config', default=None, type=click.Path(), help='JSON settings file'),
    click.option('--verbose', '-v', is_flag=True, help='Show detailed packing log'),
]


def shared_options(func):
    for option in reversed(_shared_options):
        func = option(func)
    return func


@click.group()
@click.version_option()
def cli():
    """
    SpritePacker - Pack 8-bit sprites into a single indexed atlas.

    Examples:
        spritepacker pack assets/sprites
        spritepacker pack assets --palette palette.bmp -o build/atlas.png
        spritepacker layout assets
    """
    pass


@cli.command()
@click.argument('root', default='.', type=click.Path())
@click.option('-o', '--output', default=None, help='Output PNG path (default: ROOT/SpriteAtlas.png)')
@click.option('--palette', default=None, help='Indexed image whose 256-color palette the atlas uses (default: first indexed sprite, or a grayscale ramp)')
@click.option('--no-manifest', is_flag=True, help='Do not write the JSON manifest')
@shared_options
def pack(root, output, palette, no_manifest, extension, max_size, max_images, max_width, pow2_height, config, verbose):
    """
    Pack every sprite under ROOT into one atlas image.

    Examples:
        spritepacker pack
        spritepacker pack assets/sprites --palette palette.bmp
        spritepacker pack assets --extension .png --max-size 128 -o out/atlas.png
    """
    _configure_logging(verbose)
    try:
        settings = _settings_from_options(config, extension, max_size, max_images, max_width, pow2_height, no_manifest)
        packer = SpritePacker(settings)

        files = packer.find(root)
        if not files:
            click.echo("No files to process.")
            return

        click.echo("Loading...")
        sprites = packer.load(files, root=root)
        color_map = packer.resolve_color_map(sprites, palette)

        click.echo("Fitting...")
        result = AtlasResult(pack=packer.pack(sprites), sprites=sprites, color_map=color_map, settings=settings)

        for placed in result.pack.placements:
            click.echo(f"{placed.identifier} {placed.x}x{placed.y}")
        for failure in result.pack.failures:
            r = failure.rectangle
            click.secho(f"Can't fit {r.identifier} {r.width}x{r.height}", fg='yellow')

        click.echo("Merging...")
        output_path = Path(output) if output else Path(root) / settings.output_name
        result.save(output_path)

        width, height = result.size
        click.secho(f"✓ Success! {len(result.pack.placements)} sprites packed into {width}x{height} atlas at {output_path}", fg='green')

    except FileNotFoundError as e:
        _fail(f"Error: {e}")
    except SpritePackerError as e:
        _fail(f"Error: {e}")
    except ValueError as e:
        _fail(f"Error: {e}")
    except Exception as e:
        _fail(f"Unexpected error: {e}", verbose, show_traceback=True)


@cli.command()
@click.argument('root', default='.', type=click.Path())
@shared_options
def layout(root, extension, max_size, max_images, max_width, pow2_height, config, verbose):
    """
    Print the atlas layout for ROOT as JSON without writing any files.

    Examples:
        spritepacker layout assets/sprites
        spritepacker layout assets --max-width 512 > layout.json
    """
    _configure_logging(verbose)
    try:
        settings = _settings_from_options(config, extension, max_size, max_images, max_width, pow2_height, False)
        manifest = SpritePacker(settings).layout(root)
        click.echo(manifest.model_dump_json(indent=2))

    except FileNotFoundError as e:
        _fail(f"Error: {e}")
    except SpritePackerError as e:
        _fail(f"Error: {e}")
    except ValueError as e:
        _fail(f"Error: {e}")
    except Exception as e:
        _fail(f"Unexpected error: {e}", verbose, show_traceback=True)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
