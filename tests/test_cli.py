"""Tests for the zplimage-convert CLI."""

from zplimage.cli.convert import main


class TestConvertCLI:
    """Tests for the convert command."""

    def test_convert_to_file(self, tmp_path, black_png):
        """ZPL is written to the output file."""
        image_path = tmp_path / "logo.png"
        image_path.write_bytes(black_png)
        output = tmp_path / "logo.zpl"

        assert main([str(image_path), "-w", "8", "-o", str(output)]) == 0

        assert output.read_text() == "^XA^FO0,0^GFA,8,8,1," + "FF" * 8 + "^XZ"

    def test_darkness_option(self, tmp_path, black_png):
        """Darkness option adds ~SD."""
        image_path = tmp_path / "logo.png"
        image_path.write_bytes(black_png)
        output = tmp_path / "logo.zpl"

        assert main([str(image_path), "-w", "8", "--darkness", "18", "-o", str(output)]) == 0

        assert output.read_text().startswith("^XA~SD18")

    def test_config_file(self, tmp_path, black_png):
        """Defaults come from the config file, flags override them."""
        image_path = tmp_path / "logo.png"
        image_path.write_bytes(black_png)
        config_path = tmp_path / "config.yaml"
        config_path.write_text("width: 16\nuppercase_hex: false\n")
        output = tmp_path / "logo.zpl"

        assert main([str(image_path), "--config", str(config_path), "-o", str(output)]) == 0

        assert output.read_text() == "^XA^FO0,0^GFA,16,16,2," + "ff" * 16 + "^XZ"

    def test_png_preview(self, tmp_path, black_png):
        """PNG format writes a preview image."""
        image_path = tmp_path / "logo.png"
        image_path.write_bytes(black_png)
        output = tmp_path / "preview.png"

        assert main([str(image_path), "-w", "8", "--format", "png", "-o", str(output)]) == 0

        assert output.read_bytes().startswith(b"\x89PNG")

    def test_missing_image(self, tmp_path, capsys):
        """Missing input exits with an error."""
        assert main([str(tmp_path / "missing.png")]) == 1

        assert "not found" in capsys.readouterr().err

    def test_invalid_width(self, tmp_path, black_png, capsys):
        """Invalid width exits with an error."""
        image_path = tmp_path / "logo.png"
        image_path.write_bytes(black_png)

        assert main([str(image_path), "-w", "0"]) == 1

        assert "Error" in capsys.readouterr().err

    def test_undecodable_image(self, tmp_path, capsys):
        """Corrupt images exit with an error."""
        image_path = tmp_path / "broken.png"
        image_path.write_bytes(b"garbage")

        assert main([str(image_path)]) == 1

        assert "decode stage" in capsys.readouterr().err
