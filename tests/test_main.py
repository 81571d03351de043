"""Tests for the command-line entry point (no window is opened)."""

import json

import pytest

from main import main, parse_args
from galaxy_field.catalog import DEFAULT_CATALOG
from galaxy_field.state.persistence import load_buffers


class TestArgs:

    def test_defaults(self):
        args = parse_args([])
        assert args.catalog is None
        assert args.select is None
        assert args.point_size == 1.0
        assert not args.list

    def test_short_flags(self):
        args = parse_args(['-s', 'cartwheel', '-p', '2', '-v'])
        assert args.select == 'cartwheel'
        assert args.point_size == 2.0
        assert args.verbose


class TestMain:

    def test_list(self, capsys):
        main(['--list'])
        out = capsys.readouterr().out
        for descriptor in DEFAULT_CATALOG:
            assert descriptor.id in out
        assert 'ring' in out

    def test_export(self, tmp_path, capsys):
        path = tmp_path / 'field.h5'
        main(['--export', str(path)])
        assert 'Saved to:' in capsys.readouterr().out
        assert list(load_buffers(path)) == [d.id for d in DEFAULT_CATALOG]

    def test_missing_catalog_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(['--catalog', str(tmp_path / 'missing.json'), '--list'])
        assert excinfo.value.code == 1
        assert 'File not found' in capsys.readouterr().out

    def test_invalid_catalog(self, tmp_path, capsys):
        path = tmp_path / 'bad.json'
        path.write_text(json.dumps([{'id': 'a', 'sizeLightYears': -1}]))
        with pytest.raises(SystemExit) as excinfo:
            main(['--catalog', str(path), '--list'])
        assert excinfo.value.code == 1
        assert 'Error:' in capsys.readouterr().out

    def test_non_hex_colors_exit_cleanly(self, tmp_path, capsys):
        path = tmp_path / 'bad_colors.json'
        path.write_text(
            json.dumps(
                [
                    {
                        'id': 'a',
                        'type': 'Spiral Galaxy',
                        'distanceLightYears': 1,
                        'sizeLightYears': 2,
                        'colorScheme': 'blue,red',
                    }
                ]
            )
        )
        with pytest.raises(SystemExit) as excinfo:
            main(['--catalog', str(path), '--export', str(tmp_path / 'out.h5')])
        assert excinfo.value.code == 1
        assert 'color_scheme' in capsys.readouterr().out

    def test_catalog_file(self, tmp_path, capsys):
        path = tmp_path / 'catalog.json'
        path.write_text(
            json.dumps(
                [
                    {
                        'id': 'lmc',
                        'name': 'LMC',
                        'type': 'Irregular Galaxy',
                        'distanceLightYears': 163000,
                        'sizeLightYears': 14000,
                        'colorScheme': '#43cea2,#185a9d',
                    }
                ]
            )
        )
        main(['--catalog', str(path), '--list'])
        out = capsys.readouterr().out
        assert 'lmc' in out
        assert 'irregular' in out
