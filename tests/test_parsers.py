from pathlib import Path

import pytest

from folio.errors import ValidationError
from folio.parsers import (
    FrontmatterParser,
    JsonParser,
    YamlParser,
    default_parser_registry,
    extract_frontmatter,
)

PATH = Path("post.mdx")


def test_extract_frontmatter_splits_header_and_body():
    data, body = extract_frontmatter("---\ntitle: Hi\n---\n\nBody text\n", PATH)
    assert data == {"title": "Hi"}
    assert body == "\nBody text\n"


def test_extract_frontmatter_at_end_of_file():
    data, body = extract_frontmatter("---\ntitle: Hi\n---", PATH)
    assert data == {"title": "Hi"}
    assert body == ""


def test_extract_frontmatter_empty_header():
    data, body = extract_frontmatter("---\n---\nBody\n", PATH)
    assert data == {}
    assert body == "Body\n"


def test_extract_frontmatter_ignores_inner_rules():
    text = "---\ntitle: Hi\n---\nIntro\n\n---\n\nMore\n"
    data, body = extract_frontmatter(text, PATH)
    assert data == {"title": "Hi"}
    assert "More" in body


def test_extract_frontmatter_without_header():
    data, body = extract_frontmatter("# Title\n", PATH)
    assert data == {}
    assert body == "# Title\n"


def test_extract_frontmatter_strips_bom():
    data, _ = extract_frontmatter("\ufeff---\ntitle: Hi\n---\n", PATH)
    assert data == {"title": "Hi"}


def test_extract_frontmatter_invalid_yaml():
    with pytest.raises(ValidationError, match="Invalid front matter"):
        extract_frontmatter("---\ntitle: [oops\n---\n", PATH)


def test_extract_frontmatter_not_a_mapping():
    with pytest.raises(ValidationError, match="must be a mapping"):
        extract_frontmatter("---\n- a\n- b\n---\n", PATH)


def test_yaml_parser_requires_mapping():
    with pytest.raises(ValidationError):
        YamlParser().parse("just text", Path("work.yaml"))
    assert YamlParser().parse("a: 1", Path("work.yaml")) == ({"a": 1}, "")


def test_registry_picks_parser_by_suffix():
    assert isinstance(default_parser_registry.get_parser(Path("a.MDX")), FrontmatterParser)
    assert isinstance(default_parser_registry.get_parser(Path("a.md")), FrontmatterParser)
    assert isinstance(default_parser_registry.get_parser(Path("a.json")), JsonParser)
    assert isinstance(default_parser_registry.get_parser(Path("a.yml")), YamlParser)
    assert default_parser_registry.get_parser(Path("a.txt")) is None


@pytest.mark.parametrize("header", ["date: 2024-02-30", "date: 2024-13-45"])
def test_impossible_yaml_dates_are_validation_errors(header):
    with pytest.raises(ValidationError, match="Invalid front matter"):
        extract_frontmatter(f"---\n{header}\n---\n", PATH)
    with pytest.raises(ValidationError, match="Invalid YAML"):
        YamlParser().parse(header, Path("work.yaml"))
