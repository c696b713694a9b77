from pathlib import Path

import pytest


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path):
    """A site project with one valid record per collection."""
    write(
        tmp_path / "folio.yaml",
        "site: https://dylanbritz.dev\n"
        "trailingSlash: ignore\n"
        "integrations: [vue, mdx]\n"
        "locales:\n  en: en-US\n  nl: nl-NL\n"
        "defaultLocale: en\n",
    )
    write(
        tmp_path / "src/data/blog/2024-01-15-hello.mdx",
        "---\ntitle: Hello\nauthor: Dylan\ndate: 2024-01-15\ntags: [python, web]\n---\n\n# Hello\n",
    )
    write(
        tmp_path / "src/data/projects/folio.json",
        '{"title": "Folio", "description": "This site", "link": "https://github.com/dylan/folio"}',
    )
    write(
        tmp_path / "src/data/work/acme.json",
        '{"title": "Engineer", "company": "Acme", "date": "2020-2023"}',
    )
    return tmp_path
