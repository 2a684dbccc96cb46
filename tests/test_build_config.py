import pytest

from mksysimage.build_config import BuildConfig, load_build_config


def test_defaults_when_empty():
    cfg = BuildConfig.empty()
    assert cfg.disk_size_mb == 128
    assert cfg.kernel_args == "root=/dev/sda1 ro"
    assert cfg.format == "raw"
    assert cfg.mbr_path == "/usr/lib/extlinux/mbr.bin"
    assert cfg.directory_mode == "contents"
    assert cfg.initrd is None
    assert cfg.print_log is False


def test_load_yaml(tmp_path):
    p = tmp_path / "image.yaml"
    p.write_text(
        "\n".join(
            [
                "image:",
                "  disk_size_mb: 512",
                "  format: vdi",
                "  vbox_uuid: 1234",
                "kernel:",
                "  args: 'console=ttyS0'",
                "bootloader:",
                "  mbr_path: /usr/lib/syslinux/mbr/mbr.bin",
                "sources:",
                "  directory_mode: nested",
                "diagnostics:",
                "  print_fs: true",
                "",
            ]
        ),
        encoding="utf-8",
    )
    cfg = load_build_config(str(p))
    assert cfg.disk_size_mb == 512
    assert cfg.format == "vdi"
    assert cfg.vbox_uuid == "1234"
    assert cfg.kernel_args == "console=ttyS0"
    assert cfg.mbr_path == "/usr/lib/syslinux/mbr/mbr.bin"
    assert cfg.directory_mode == "nested"
    assert cfg.print_fs is True


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_build_config(str(tmp_path / "nope.yaml"))


def test_rejects_non_yaml(tmp_path):
    p = tmp_path / "image.json"
    p.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError, match="YAML"):
        load_build_config(str(p))


def test_rejects_non_mapping(tmp_path):
    p = tmp_path / "image.yml"
    p.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_build_config(str(p))


def test_rejects_unknown_directory_mode(tmp_path):
    p = tmp_path / "image.yml"
    p.write_text("sources:\n  directory_mode: flat\n", encoding="utf-8")
    with pytest.raises(ValueError, match="directory_mode"):
        load_build_config(str(p))


def test_syntax_error_is_reported_as_value_error(tmp_path):
    p = tmp_path / "image.yaml"
    p.write_text("image: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValueError, match="not valid YAML"):
        load_build_config(str(p))


@pytest.mark.parametrize("value", ["big", "0", "-5", "true"])
def test_disk_size_must_be_positive_integer(tmp_path, value):
    p = tmp_path / "image.yaml"
    p.write_text(f"image:\n  disk_size_mb: {value}\n", encoding="utf-8")
    with pytest.raises(ValueError, match="disk_size_mb"):
        load_build_config(str(p))


def test_zero_disk_size_is_not_replaced_by_default():
    with pytest.raises(ValueError):
        BuildConfig(raw={"image": {"disk_size_mb": 0}}).disk_size_mb


def test_quoted_flag_is_rejected(tmp_path):
    p = tmp_path / "image.yaml"
    p.write_text("diagnostics:\n  print_fs: 'false'\n", encoding="utf-8")
    with pytest.raises(ValueError, match="print_fs"):
        load_build_config(str(p))


def test_real_boolean_flags(tmp_path):
    p = tmp_path / "image.yaml"
    p.write_text("diagnostics:\n  print_log: true\n  print_fs: false\n", encoding="utf-8")
    cfg = load_build_config(str(p))
    assert cfg.print_log is True
    assert cfg.print_fs is False


def test_section_must_be_a_mapping(tmp_path):
    p = tmp_path / "image.yaml"
    p.write_text("image: 512\n", encoding="utf-8")
    with pytest.raises(ValueError, match="image must be a mapping"):
        load_build_config(str(p))
