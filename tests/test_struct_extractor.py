"""
struct_extractor 모듈 테스트
주석 제거, 선언 판별, 사용 탐지, 레지스트리 동작을 검증합니다.
"""
import pytest
import os
import sys

# 상위 디렉토리를 path에 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from struct_extractor import (
    CommentStripper,
    DeclarationCandidate,
    DeclarationExtractor,
    DeclarationShape,
    ErrorKind,
    ErrorSink,
    LineIndex,
    Location,
    SourceUnit,
    TypeRegistry,
    UsageDetector,
    strip_comments,
)


def _extract(text, path="a.h", registry=None, errors=None):
    """주석 제거 → 선언 추출 → 사용 탐지를 한 파일에 대해 수행"""
    registry = registry if registry is not None else TypeRegistry()
    unit = SourceUnit(path, text)
    clean = strip_comments(text)
    index = LineIndex(clean.split("\n"))
    DeclarationExtractor().extract(unit, clean, index, registry, errors)
    UsageDetector().detect(unit, clean, index, registry)
    return registry


class TestCommentStripper:
    """CommentStripper 테스트"""

    def test_line_comment(self):
        assert strip_comments("int a; // note\nint b;") == "int a; \nint b;"

    def test_block_comment_keeps_newlines(self):
        text = "/* one\ntwo\nthree */struct A { int x; };"
        stripped = CommentStripper().strip(text)
        assert stripped == "\n\nstruct A { int x; };"

    def test_block_comment_flattened(self):
        text = "/* one\ntwo */struct A { int x; };"
        assert CommentStripper(preserve_lines=False).strip(text) == "struct A { int x; };"

    def test_comment_hides_struct(self):
        registry = _extract("// struct Ghost { int x; };\n/* struct Ghost2 { int y; }; */")
        assert len(registry) == 0

    def test_block_comment_with_stars(self):
        assert strip_comments("/** doc **/int a;") == "int a;"


class TestLineIndex:
    """LineIndex / Location 테스트"""

    def test_line_at(self):
        index = LineIndex(["ab", "cd", ""])
        assert index.line_at(0) == 1
        assert index.line_at(2) == 1   # 첫 줄의 개행 문자
        assert index.line_at(3) == 2
        assert index.line_at(6) == 3

    def test_location_str_and_parse(self):
        location = Location("inc/a.h", 12)
        assert str(location) == "inc/a.h:12"
        assert Location.parse("inc/a.h:12") == location
        assert Location.parse("C:/src/a.h:3") == Location("C:/src/a.h", 3)

    def test_location_parse_invalid(self):
        with pytest.raises(ValueError):
            Location.parse("a.h")
        with pytest.raises(ValueError):
            Location.parse("a.h:x")


class TestDeclarationExtractor:
    """DeclarationExtractor 테스트"""

    @pytest.fixture
    def extractor(self):
        return DeclarationExtractor()

    def _disambiguate(self, extractor, content):
        unit = SourceUnit("a.h", content)
        return extractor.disambiguate(DeclarationCandidate(content, unit, 0))

    def test_priority(self, extractor):
        assert extractor.priority == [
            DeclarationShape.TYPEDEF,
            DeclarationShape.TAGGED,
            DeclarationShape.PACKED,
            DeclarationShape.FORWARD,
        ]

    def test_typedef_alias_wins_over_tag(self, extractor):
        declaration = self._disambiguate(extractor, "typedef struct node_s { int v; } Node;")
        assert declaration.name == "Node"
        assert declaration.shape is DeclarationShape.TYPEDEF

    def test_anonymous_typedef(self, extractor):
        declaration = self._disambiguate(extractor, "typedef struct { int v; } Anon;")
        assert declaration.name == "Anon"

    def test_tagged(self, extractor):
        declaration = self._disambiguate(extractor, "struct Point { int x; int y; }")
        assert declaration.name == "Point"
        assert declaration.shape is DeclarationShape.TAGGED

    def test_packed(self, extractor):
        declaration = self._disambiguate(extractor, "#pragma pack(1)\nstruct Wire { char c; }")
        assert declaration.name == "Wire"
        assert declaration.shape is DeclarationShape.PACKED

        declaration = self._disambiguate(extractor, "__attribute__((packed)) struct Frame { int n; }")
        assert declaration.name == "Frame"
        assert declaration.shape is DeclarationShape.PACKED

    def test_forward(self, extractor):
        declaration = self._disambiguate(extractor, "struct Later;")
        assert declaration.name == "Later"
        assert declaration.shape is DeclarationShape.FORWARD
        assert not declaration.shape.has_body

    def test_no_rule_matches(self, extractor):
        assert self._disambiguate(extractor, "struct { int x; }") is None

    def test_extract_locations(self):
        text = "\n".join([
            "#include <stdio.h>",
            "",
            "typedef struct {",
            "    int id;",
            "} Item;",
            "struct Later;",
        ])
        registry = _extract(text, path="inc/item.h")
        assert registry.get("Item").definitions == [Location("inc/item.h", 3)]
        assert registry.get("Later").definitions == [Location("inc/item.h", 6)]

    def test_nested_struct_ends_at_first_brace(self):
        text = "struct Outer {\n    struct Inner { int a; } in;\n    int b;\n};"
        registry = _extract(text)
        # 넓은 패턴의 본문은 [^}]* 이므로 Outer 후보는 첫 '}' 에서 끝남
        assert "Outer" in registry
        assert registry.get("Outer").definitions == [Location("a.h", 1)]

    def test_empty_text(self):
        registry = _extract("")
        assert len(registry) == 0

    def test_text_without_struct(self):
        errors = ErrorSink()
        registry = _extract("int main(void) { return 0; }", errors=errors)
        assert len(registry) == 0
        assert len(errors) == 0


class TestUsageDetector:
    """UsageDetector 테스트"""

    def test_known_name_usages(self):
        registry = TypeRegistry()
        registry.add_definition("Point", Location("a.h", 1))
        text = "struct Point p;\nPoint *q;\nPoint arr[10];\nPoint origin = { 0, 0 };"
        _extract(text, path="b.c", registry=registry)

        assert registry.get("Point").usages == [
            Location("b.c", 1),
            Location("b.c", 2),
            Location("b.c", 3),
            Location("b.c", 4),
        ]

    def test_unknown_name_ignored(self):
        registry = _extract("struct Unknown u;\nint x;", path="b.c")
        assert len(registry) == 0
        assert "Unknown" not in registry

    def test_usage_only_after_definition(self):
        registry = TypeRegistry()
        _extract("Late l;", path="a.c", registry=registry)
        _extract("typedef struct { int v; } Late;", path="b.h", registry=registry)
        entry = registry.get("Late")
        assert entry.usages == []
        assert entry.definitions == [Location("b.h", 1)]

    def test_field_inside_body_counts_as_usage(self):
        text = "typedef struct { int v; } Inner;\nstruct Outer {\n    Inner in;\n};"
        registry = _extract(text)
        assert registry.get("Inner").usages == [Location("a.h", 3)]

    def test_same_line_counted_once(self):
        registry = TypeRegistry()
        registry.add_definition("P", Location("a.h", 1))
        _extract("P a; P b;", path="b.c", registry=registry)
        assert registry.get("P").usages == [Location("b.c", 1)]


class TestTypeRegistry:
    """TypeRegistry 테스트"""

    @pytest.fixture
    def ranked(self):
        registry = TypeRegistry()
        counts = {"A": 10, "C": 8, "B": 8, "D": 5, "E": 3, "F": 1}
        for name, count in counts.items():
            registry.add_definition(name, Location(f"{name.lower()}.h", 1))
            for line in range(1, count):
                registry.add_usage(name, Location("use.c", line))
        return registry

    def test_duplicate_locations(self):
        registry = TypeRegistry()
        assert registry.add_definition("S", Location("a.h", 1))
        assert not registry.add_definition("S", Location("a.h", 1))
        assert registry.add_usage("S", Location("b.c", 4))
        assert not registry.add_usage("S", Location("b.c", 4))
        assert registry.get("S").total_count == 2

    def test_usage_does_not_create_entry(self):
        registry = TypeRegistry()
        assert not registry.add_usage("Nope", Location("b.c", 1))
        assert len(registry) == 0

    def test_top_order_and_ties(self, ranked):
        top = ranked.top(5)
        assert [e.name for e in top] == ["A", "B", "C", "D", "E"]
        assert [e.total_count for e in top] == [10, 8, 8, 5, 3]

    def test_top_more_than_available(self, ranked):
        assert len(ranked.top(100)) == 6

    def test_export_and_import(self, ranked):
        data = ranked.to_export()
        first = data["definitions"][0]
        assert first == {
            "name": "A",
            "count": 10,
            "definitionFiles": ["a.h:1"],
            "usageFiles": [f"use.c:{i}" for i in range(1, 10)],
        }
        restored = TypeRegistry.from_export(data)
        assert restored.names == ranked.names
        assert restored.get("C").total_count == 8

    def test_import_recomputes_count(self):
        data = {"definitions": [
            {"name": "S", "count": 99, "definitionFiles": ["a.h:1", "a.h:1"], "usageFiles": ["b.c:2"]},
        ]}
        registry = TypeRegistry.from_export(data)
        assert registry.get("S").total_count == 2

    def test_import_invalid(self):
        with pytest.raises(ValueError):
            TypeRegistry.from_export({"structs": []})
        with pytest.raises(ValueError):
            TypeRegistry.from_export({"definitions": [{"count": 1}]})
        with pytest.raises(ValueError):
            TypeRegistry.from_export({"definitions": [{"name": "S", "definitionFiles": ["bad"]}]})


class TestErrorSink:
    """ErrorSink 테스트"""

    def test_record_in_memory(self):
        sink = ErrorSink()
        sink.record(ErrorKind.IO, "IO Error processing a.c")
        assert len(sink) == 1
        assert sink.lines == ["[io] IO Error processing a.c"]
        assert sink.of_kind(ErrorKind.DECODE) == []

    def test_truncate_and_append(self, tmp_path):
        path = tmp_path / "out" / "errors.txt"
        path.parent.mkdir()
        path.write_text("old\n", encoding="utf-8")

        sink = ErrorSink(path, truncate=True)
        sink.record(ErrorKind.MISSING_BODY, "first")
        ErrorSink(path).record(ErrorKind.NO_FIELDS, "second")

        assert path.read_text(encoding="utf-8").splitlines() == [
            "[missing_body] first",
            "[no_fields] second",
        ]
