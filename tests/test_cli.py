"""
Tests for SpritePacker CLI

These tests verify the CLI command structure, output files and error handling.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from spritepacker.cli import cli


@pytest.fixture
def sprite_dir(tmp_path, write_sprite):
    write_sprite("sprites/hero.bmp", (64, 64), index=5)
    write_sprite("sprites/coin.bmp", (32, 32), index=9)
    return tmp_path / "sprites"


class TestCLI:
    """Test CLI command structure and basic functionality"""

    def test_cli_help(self):
        """Test that CLI help works"""
        runner = CliRunner()
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'SpritePacker' in result.output
        assert 'pack' in result.output
        assert 'layout' in result.output

    def test_cli_version(self):
        """Test that version flag works"""
        runner = CliRunner()
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0

    def test_pack_help(self):
        """Test that pack command help works"""
        runner = CliRunner()
        result = runner.invoke(cli, ['pack', '--help'])
        assert result.exit_code == 0
        assert 'Pack every sprite' in result.output
        assert '--output' in result.output
        assert '--palette' in result.output
        assert '--max-size' in result.output
        assert '--verbose' in result.output

    def test_pack_writes_atlas(self, sprite_dir):
        """Test that pack writes SpriteAtlas.png and its manifest into ROOT"""
        runner = CliRunner()
        result = runner.invoke(cli, ['pack', str(sprite_dir)])

        if result.exit_code != 0:
            print(f"Output: {result.output}")
        assert result.exit_code == 0
        assert 'Loading...' in result.output
        assert 'Fitting...' in result.output
        assert 'Merging...' in result.output
        assert 'hero.bmp 0x0' in result.output
        assert 'Success' in result.output
        assert (sprite_dir / 'SpriteAtlas.png').exists()
        assert (sprite_dir / 'SpriteAtlas.json').exists()

    def test_pack_custom_output_no_manifest(self, sprite_dir, tmp_path):
        out = tmp_path / 'out' / 'atlas.png'
        runner = CliRunner()
        result = runner.invoke(cli, ['pack', str(sprite_dir), '-o', str(out), '--no-manifest', '-v'])

        assert result.exit_code == 0
        assert out.exists()
        assert not out.with_suffix('.json').exists()

    def test_pack_reports_failures(self, sprite_dir):
        """Test that a sprite wider than --max-width is reported but the run succeeds"""
        runner = CliRunner()
        result = runner.invoke(cli, ['pack', str(sprite_dir), '--max-width', '32'])

        assert result.exit_code == 0
        assert "Can't fit hero.bmp 64x64" in result.output

    def test_pack_empty_directory(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(cli, ['pack', str(tmp_path)])
        assert result.exit_code == 0
        assert 'No files to process.' in result.output
        assert not (tmp_path / 'SpriteAtlas.png').exists()

    def test_pack_missing_root(self):
        runner = CliRunner()
        result = runner.invoke(cli, ['pack', '/nonexistent/sprites'])
        assert result.exit_code != 0
        assert 'not found' in result.output.lower()

    def test_pack_bad_palette(self, sprite_dir):
        runner = CliRunner()
        result = runner.invoke(cli, ['pack', str(sprite_dir), '--palette', '/nonexistent/palette.bmp'])
        assert result.exit_code == 1
        assert 'Error' in result.output

    def test_pack_with_config_file(self, sprite_dir, tmp_path):
        config = tmp_path / 'settings.json'
        config.write_text(json.dumps({"output_name": "Custom.png", "write_manifest": False}))

        runner = CliRunner()
        result = runner.invoke(cli, ['pack', str(sprite_dir), '--config', str(config)])

        assert result.exit_code == 0
        assert (sprite_dir / 'Custom.png').exists()
        assert not (sprite_dir / 'Custom.json').exists()

    def test_pack_invalid_config(self, sprite_dir, tmp_path):
        config = tmp_path / 'settings.json'
        config.write_text(json.dumps({"unknown": 1}))

        runner = CliRunner()
        result = runner.invoke(cli, ['pack', str(sprite_dir), '--config', str(config)])
        assert result.exit_code == 1
        assert 'Invalid settings' in result.output

    def test_pack_defaults_to_current_directory(self, sprite_dir):
        runner = CliRunner()
        with runner.isolated_filesystem(temp_dir=sprite_dir.parent):
            for sprite in sprite_dir.iterdir():
                Path(sprite.name).write_bytes(sprite.read_bytes())
            result = runner.invoke(cli, ['pack'])
            assert result.exit_code == 0
            assert Path('SpriteAtlas.png').exists()

    def test_layout_prints_json(self, sprite_dir):
        runner = CliRunner()
        result = runner.invoke(cli, ['layout', str(sprite_dir)])

        assert result.exit_code == 0
        layout = json.loads(result.output)
        assert layout['width'] == 128
        assert [s['name'] for s in layout['sprites']] == ['hero.bmp', 'coin.bmp']
        assert not (sprite_dir / 'SpriteAtlas.png').exists()
