"""
설정 / 네이밍 규칙 / CLI 테스트
"""
import json
import pytest
import os
import sys

# 상위 디렉토리를 path에 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import main as cli
from shared_config import (
    ConfigError,
    Settings,
    capitalize,
    getter_name,
    load_settings,
    output_file_name,
    setter_name,
)


def _write_config(path, text):
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestNamingRules:
    """네이밍 규칙 테스트"""

    def test_accessors(self):
        assert capitalize("userName") == "UserName"
        assert capitalize("") == ""
        assert getter_name("x") == "getX"
        assert setter_name("rfrn_date") == "setRfrn_date"

    def test_output_file_name(self):
        used = set()
        assert output_file_name("include/point.h", used) == "point.java"
        used.add("point.java")
        assert output_file_name("src/point.c", used) == "point_c.java"
        assert output_file_name("Makefile", {"Makefile.java"}) == "Makefile_src.java"

    def test_output_file_name_repeated_collision(self):
        used = {"rec.java", "rec_h.java", "rec_h_2.java"}
        assert output_file_name("c/rec.h", used) == "rec_h_3.java"


class TestSettings:
    """Settings / load_settings 테스트"""

    def test_defaults(self):
        settings = Settings(source_root="./src")
        assert settings.include_patterns == ["*.c", "*.h"]
        assert settings.top_n == 5
        assert settings.preserve_line_numbers is True
        assert settings.report_json_path.as_posix() == "SAOut/struct_report.json"
        assert settings.generated_path.as_posix() == "SAOut/generated"
        assert settings.log_path.as_posix() == "SAOut/logs"

    @pytest.mark.parametrize("values", [
        {"top_n": 0},
        {"top_n": "5"},
        {"include_patterns": "*.c"},
        {"primary_encoding": "no-such-codec"},
        {"preserve_line_numbers": "yes"},
        {"report_json": ""},
    ])
    def test_invalid_values(self, values):
        with pytest.raises(ConfigError):
            Settings(source_root="./src", **values)

    def test_unknown_keys_ignored(self):
        settings = Settings.from_dict({"source_root": "./src", "colour": "blue"})
        assert settings.source_root == "./src"

    def test_optional_outputs(self):
        settings = Settings(source_root="./src", report_txt=None, error_file=None)
        assert settings.report_txt_path is None
        assert settings.error_file_path is None

    def test_load_with_overrides(self, tmp_path):
        path = _write_config(tmp_path / "config.yaml", "\n".join([
            "source_root: ./legacy",
            "exclude_patterns: ['test/*']",
            "top_n: 3",
            "java_package: com.example.dto",
        ]))
        settings = load_settings(path, {"top_n": 10, "output_dir": None})
        assert settings.source_root == "./legacy"
        assert settings.exclude_patterns == ["test/*"]
        assert settings.top_n == 10
        assert settings.output_dir == "./SAOut"
        assert settings.java_package == "com.example.dto"

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_settings(str(tmp_path / "none.yaml"))

    def test_load_invalid_yaml(self, tmp_path):
        path = _write_config(tmp_path / "config.yaml", "source_root: [unclosed")
        with pytest.raises(ConfigError):
            load_settings(path)

    def test_load_non_mapping(self, tmp_path):
        path = _write_config(tmp_path / "config.yaml", "- a\n- b\n")
        with pytest.raises(ConfigError):
            load_settings(path)

    def test_source_root_required(self, tmp_path):
        path = _write_config(tmp_path / "config.yaml", "top_n: 2\n")
        with pytest.raises(ConfigError):
            load_settings(path)
        assert load_settings(path, {"source_root": "./src"}).source_root == "./src"


class TestCli:
    """main.py 명령 테스트"""

    @pytest.fixture
    def project(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        (src / "shapes.h").write_text(
            "typedef struct {\n    int x;\n    int y;\n} Point;\n"
            "struct Shape {\n    Point *origin;\n    unsigned int sides;\n    char label[16];\n};\n",
            encoding="utf-8",
        )
        (src / "use.c").write_text("Point p;\nstruct Shape s;\n", encoding="utf-8")
        config = _write_config(tmp_path / "config.yaml", "\n".join([
            f"source_root: {src.as_posix()}",
            f"output_dir: {(tmp_path / 'out').as_posix()}",
            "log_level: DEBUG",
        ]))
        return tmp_path, config

    def test_no_command(self):
        assert cli.main([]) == 1

    def test_analyze_then_generate(self, project):
        root, config = project
        out = root / "out"

        assert cli.main(["analyze", "-c", config]) == 0
        report = json.loads((out / "struct_report.json").read_text(encoding="utf-8"))
        names = [d["name"] for d in report["definitions"]]
        assert names == ["Point", "Shape"]
        assert (out / "struct_report.txt").exists()
        assert (out / "errors.txt").read_text(encoding="utf-8") == ""
        assert (out / "logs" / "analysis.log").exists()

        assert cli.main(["generate", "-c", config, "--top-n", "1"]) == 0
        source = (out / "generated" / "shapes.java").read_text(encoding="utf-8")
        assert "class Point {" in source
        assert "class Shape {" in source
        assert "    private Point origin;" in source
        assert "    private UnsignedInt sides;" in source
        assert "    private List<String> label;" in source
        assert (out / "generated" / "UnsignedInt.java").exists()
        assert (out / "logs" / "generate.log").exists()

    def test_generate_without_report(self, project):
        _, config = project
        assert cli.main(["generate", "-c", config]) == 1

    def test_missing_source_root(self, project, tmp_path):
        _, config = project
        assert cli.main(["analyze", "-c", config, "--source-root", str(tmp_path / "nope")]) == 1

    def test_missing_config(self, tmp_path):
        assert cli.main(["analyze", "-c", str(tmp_path / "none.yaml")]) == 1
