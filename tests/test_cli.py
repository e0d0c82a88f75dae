"""
End-to-end tests for the binding-generator command line.
"""

import pytest
import yaml

from binding_generator.cli import build_parser, main


@pytest.fixture
def config_file(tmp_path):
    units_dir = tmp_path / "units"
    units_dir.mkdir()
    (units_dir / "shapes.yaml").write_text(yaml.safe_dump({
        "file_path": "include/shapes.h",
        "declarations": [
            {"kind": "struct", "name": "Point", "fields": [{"name": "x", "type": "int"}, {"name": "y", "type": "int"}]},
            {"kind": "function", "name": "distance", "return_type": "double",
             "parameters": [{"name": "a", "type": "Point"}, {"name": "b", "type": "Point"}]},
        ],
    }), encoding="utf-8")

    path = tmp_path / "bindings.yaml"
    path.write_text(yaml.safe_dump({
        "generator_kind": "csharp",
        "output_dir": "generated",
        "modules": [
            {"library_name": "shapes", "output_namespace": "Acme.Shapes", "units": ["units/shapes.yaml"]},
        ],
    }), encoding="utf-8")
    return path


def test_parser_leaves_unset_overrides_as_none():
    """Test options not given on the command line stay None"""
    args = build_parser().parse_args(["-c", "bindings.yaml"])
    assert args.output_dir is None
    assert args.generator_kind is None
    assert args.generate_single_csharp_file is None


def test_generates_csharp_files(config_file, tmp_path):
    """Test a full C# run writes the expected bindings"""
    assert main(["-c", str(config_file), "--no-color"]) == 0

    generated = tmp_path / "generated" / "shapes.cs"
    text = generated.read_text(encoding="utf-8")
    assert "public struct Point" in text
    assert "public static extern double distance(Point a, Point b);" in text


def test_kind_and_output_overrides(config_file, tmp_path):
    """Test --kind and --output-dir override the config file"""
    out_dir = tmp_path / "cli_out"

    assert main(["-c", str(config_file), "-k", "cli", "-o", str(out_dir), "--no-color"]) == 0

    assert sorted(path.name for path in out_dir.iterdir()) == ["shapes_cli.cpp", "shapes_cli.h"]
    assert not (tmp_path / "generated").exists()


def test_single_file_flag(config_file, tmp_path):
    """Test --single-file writes one file per module"""
    assert main(["-c", str(config_file), "--single-file", "--no-color"]) == 0
    assert (tmp_path / "generated" / "Acme.Shapes.cs").is_file()


def test_invalid_config_returns_error_code(tmp_path):
    """Test an invalid config exits with status 1"""
    path = tmp_path / "bad.yaml"
    path.write_text("generator_kind: java\nmodules: []\n", encoding="utf-8")

    assert main(["-c", str(path), "--no-color"]) == 1


def test_missing_unit_file_returns_error_code(tmp_path):
    """Test a missing unit description exits with status 1"""
    path = tmp_path / "bindings.yaml"
    path.write_text(yaml.safe_dump({"modules": [{"library_name": "a", "units": ["missing.yaml"]}]}), encoding="utf-8")

    assert main(["-c", str(path), "--no-color"]) == 1
