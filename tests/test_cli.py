"""End-to-end tests for the palforge command line."""

import hashlib
import json
import os

import pytest

from palforge.cli import main, single_mode_total
from palforge.core.config import Config
from palforge.core.database import Database
from palforge.core.parameters import GenerationMode, GenerationParameters, GrayscaleType


@pytest.fixture
def cli(tmp_path):
    """Run the CLI against a private settings file and history database."""
    config_path = str(tmp_path / 'config.json')
    db_path = str(tmp_path / 'history.db')

    def run(*argv):
        return main(['--no-color', '--config', config_path, '--db', db_path] + list(argv))

    run.config_path = config_path
    run.db_path = db_path
    return run


def pal_names(folder):
    return sorted(name for name in os.listdir(folder) if name.endswith('.pal'))


class TestGroupsCommands:
    def test_add_and_list(self, cli, capsys):
        assert cli('groups', 'add', '--name', 'Hair', '--indices', '16-19,40',
                   '--mode', 'colorize', '--count', '3') == 0
        assert cli('groups', 'list') == 0

        out = capsys.readouterr().out
        assert 'Hair' in out
        assert '16-19,40' in out
        assert 'batch size 3' in out

        groups = Config(cli.config_path)
        groups.load()
        assert groups.load_groups()[0].mode is GenerationMode.COLORIZE

    def test_add_rejects_bad_indices(self, cli, capsys):
        assert cli('groups', 'add', '--indices', '300') == 1
        assert cli('groups', 'add', '--indices', 'a-b') == 1

    def test_duplicate_remove_clear(self, cli):
        cli('groups', 'add', '--name', 'Hair', '--indices', '1-3')
        assert cli('groups', 'duplicate', '1') == 0

        config = Config(cli.config_path)
        config.load()
        names = [g.name for g in config.load_groups()]
        assert len(names) == 2
        assert names[0] == 'Hair'

        assert cli('groups', 'remove', '1') == 0
        assert cli('groups', 'remove', '5') == 1
        config.load()
        assert len(config.load_groups()) == 1

        assert cli('groups', 'clear') == 0
        config.load()
        assert config.load_groups() == []

    def test_export_import(self, cli, tmp_path):
        cli('groups', 'add', '--name', 'a;b|c', '--indices', '1-3', '--hue-min', '-45')
        exported = str(tmp_path / 'groups.json')
        assert cli('groups', 'export', exported) == 0

        with open(exported, encoding='utf-8') as f:
            assert json.load(f)['color_group_count'] == 1

        cli('groups', 'clear')
        assert cli('groups', 'import', exported) == 0
        assert cli('groups', 'import', exported, '--append') == 0

        config = Config(cli.config_path)
        config.load()
        groups = config.load_groups()
        assert [g.name for g in groups] == ['a;b|c', 'a;b|c']
        assert groups[0].parameters.hue_min == -45.0

    def test_import_missing_file(self, cli, tmp_path):
        assert cli('groups', 'import', str(tmp_path / 'nope.json')) == 1


class TestGenerateCommand:
    def test_generate_writes_batch(self, cli, pal_file, tmp_path):
        out = tmp_path / 'out'
        cli('groups', 'add', '--name', 'Hair', '--indices', '16-23',
            '--mode', 'colorize', '--count', '3')
        cli('groups', 'add', '--name', 'Cloth', '--indices', '64-71', '--count', '2')

        assert cli('generate', '-i', str(pal_file), '-o', str(out)) == 0
        assert pal_names(out) == ['palette_001.pal', 'palette_002.pal', 'palette_003.pal']

        for name in pal_names(out):
            data = (out / name).read_bytes()
            assert len(data) == 1024
            assert all(data[i * 4 + 3] == 0 for i in range(256))

        runs = Database(cli.db_path).get_recent_runs()
        assert runs[0].written == 3
        assert runs[0].group_count == 2

    def test_generate_remembers_paths(self, cli, pal_file, tmp_path):
        out = tmp_path / 'out'
        cli('groups', 'add', '--indices', '1', '--count', '1')
        cli('generate', '-i', str(pal_file), '-o', str(out))

        # second run reuses the last input and output
        assert cli('generate') == 0
        assert pal_names(out) == ['palette_001.pal', 'palette_001_1.pal']

    def test_generate_structured_names(self, cli, pal_file, tmp_path):
        out = tmp_path / 'out'
        cli('groups', 'add', '--indices', '1', '--count', '2')
        assert cli('generate', '-i', str(pal_file), '-o', str(out),
                   '--class', 'knight', '--gender', 'm', '--costume', '1') == 0
        assert pal_names(out) == ['knight_m_300_1.pal', 'knight_m_301_1.pal']

    def test_generate_invalid_group(self, cli, pal_file, tmp_path, capsys):
        config = Config(cli.config_path)
        config.data['color_group_count'] = 1
        config.data['color_groups'] = 'Empty;0;10;;'
        config.save()

        assert cli('generate', '-i', str(pal_file), '-o', str(tmp_path / 'out')) == 1
        assert 'Empty' in capsys.readouterr().out

    def test_generate_missing_input(self, cli, tmp_path):
        assert cli('generate', '-o', str(tmp_path)) == 1
        assert cli('generate', '-i', str(tmp_path / 'x.pal'), '-o', str(tmp_path)) == 1

    def test_no_history(self, cli, pal_file, tmp_path):
        cli('groups', 'add', '--indices', '1', '--count', '1')
        cli('generate', '-i', str(pal_file), '-o', str(tmp_path / 'out'), '--no-history')
        assert not os.path.exists(cli.db_path)


class TestSingleCommand:
    def test_grayscale_both(self, cli, pal_file, tmp_path):
        out = tmp_path / 'out'
        assert cli('single', '-i', str(pal_file), '-o', str(out), '--mode', 'grayscale',
                   '--grayscale-type', 'both', '--count', '1') == 0
        assert len(pal_names(out)) == 6

    def test_hsv_distributed(self, cli, pal_file, tmp_path):
        out = tmp_path / 'out'
        assert cli('single', '-i', str(pal_file), '-o', str(out),
                   '--indices', '0-15', '--count', '4') == 0
        assert len(pal_names(out)) == 4

    def test_negative_count(self, cli, pal_file, tmp_path):
        assert cli('single', '-i', str(pal_file), '-o', str(tmp_path),
                   '--count', '-1') == 1

    def test_totals(self):
        params = GenerationParameters(hue_min=0.0, hue_max=20.0, hue_step=10.0)
        assert single_mode_total(GenerationMode.HSV_STANDARD, params, 5) == 5
        assert single_mode_total(GenerationMode.COLORIZE, params, 5) == 5
        params.grayscale_type = GrayscaleType.BLACK_WHITE
        assert single_mode_total(GenerationMode.GRAYSCALE, params, 2) == 6


class TestPreviewCommand:
    def test_preview_png(self, cli, pal_file, tmp_path):
        cli('groups', 'add', '--indices', '16-23', '--count', '3')
        png = tmp_path / 'preview.png'
        pal = tmp_path / 'preview.pal'

        assert cli('preview', '-i', str(pal_file), '-o', str(png),
                   '--variations', '2', '--pal', str(pal)) == 0
        assert png.exists()
        assert len(pal.read_bytes()) == 1024

    def test_preview_sheet(self, cli, pal_file, tmp_path):
        cli('groups', 'add', '--indices', '16-23', '--count', '3')
        png = tmp_path / 'sheet.png'
        assert cli('preview', '-i', str(pal_file), '-o', str(png), '--sheet') == 0
        assert png.exists()

    def test_preview_bad_variations(self, cli, pal_file, tmp_path):
        assert cli('preview', '-i', str(pal_file), '-o', str(tmp_path / 'p.png'),
                   '--variations', 'x') == 1


class TestHistoryAndPaths:
    def test_history(self, cli, pal_file, tmp_path, capsys):
        cli('groups', 'add', '--indices', '1', '--count', '2')
        cli('generate', '-i', str(pal_file), '-o', str(tmp_path / 'out'))
        capsys.readouterr()

        assert cli('history') == 0
        out = capsys.readouterr().out
        assert 'completed' in out
        assert '2/2' in out

        assert cli('history', '--run', '1') == 0
        assert 'palette_002.pal' in capsys.readouterr().out
        assert cli('history', '--run', '99') == 1

    def test_history_by_hash(self, cli, pal_file, tmp_path, capsys):
        out = tmp_path / 'out'
        cli('groups', 'add', '--indices', '1', '--count', '2')
        cli('generate', '-i', str(pal_file), '-o', str(out))
        capsys.readouterr()

        assert cli('history', '--hash', str(out / 'palette_002.pal')) == 0
        assert 'palette_002.pal' in capsys.readouterr().out

        digest = hashlib.md5((out / 'palette_001.pal').read_bytes()).hexdigest()
        assert cli('history', '--hash', digest.upper()) == 0
        assert 'palette_001.pal' in capsys.readouterr().out

        assert cli('history', '--hash', '0' * 32) == 0
        assert 'No recorded palette' in capsys.readouterr().out

    def test_paths(self, cli, capsys):
        assert cli('paths') == 0
        out = capsys.readouterr().out
        assert cli.config_path in out
        assert cli.db_path in out
