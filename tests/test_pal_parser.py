"""Tests for palforge.parsers.pal_parser: .pal I/O and swatch rendering."""

from palforge.parsers.pal_parser import PALParser, contact_sheet, render_swatch

from conftest import make_palette


class TestLoadSave:
    def test_load_keeps_bytes_exactly(self, pal_file, gradient_palette):
        parser = PALParser()
        assert parser.load(str(pal_file))
        assert parser.data == gradient_palette
        assert parser.filename == str(pal_file)

    def test_missing_file(self, tmp_path, capsys):
        parser = PALParser()
        assert not parser.load(str(tmp_path / 'nope.pal'))
        assert not parser.is_loaded
        assert '[ERROR]' in capsys.readouterr().out

    def test_wrong_size(self, tmp_path):
        path = tmp_path / 'short.pal'
        path.write_bytes(b'\x00' * 1023)
        assert not PALParser().load(str(path))

    def test_oversized_rejected(self):
        assert not PALParser().load_from_bytes(b'\x00' * 1025)

    def test_save(self, tmp_path, gradient_palette):
        path = tmp_path / 'out.pal'
        assert PALParser(gradient_palette).save(str(path))
        assert path.read_bytes() == gradient_palette

    def test_save_without_data(self, tmp_path):
        assert not PALParser().save(str(tmp_path / 'out.pal'))


class TestColors:
    def test_palette_list(self, gradient_palette):
        colors = PALParser(gradient_palette).palette
        assert len(colors) == 256
        assert colors[10] == (10, 70, 245, 255)

    def test_get_color_out_of_range(self, gradient_palette):
        assert PALParser(gradient_palette).get_color(300) == (0, 0, 0, 0)


class TestImages:
    def test_swatch_size_and_colors(self):
        data = make_palette({0: (255, 0, 0, 0), 17: (0, 0, 255, 255)})
        img = render_swatch(data, cell_size=4)
        assert img.size == (64, 64)
        assert img.getpixel((0, 0)) == (255, 0, 0)
        # index 17 is row 1, column 1
        assert img.getpixel((5, 5)) == (0, 0, 255)

    def test_to_image(self, gradient_palette):
        assert PALParser(gradient_palette).to_image().size == (256, 256)
        assert PALParser().to_image() is None

    def test_contact_sheet_layout(self, gradient_palette):
        sheet = contact_sheet([gradient_palette] * 3, columns=2, cell_size=4, padding=4)
        assert sheet.size == (140, 140)

    def test_contact_sheet_empty(self):
        assert contact_sheet([]) is None
