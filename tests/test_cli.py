from datetime import date

from click.testing import CliRunner
from PIL import Image

from conftest import write
from folio import __version__
from folio.cli import _extract_slug, cli


class FakeQuestion:
    def __init__(self, answer):
        self.answer = answer

    def ask(self):
        return self.answer


def fake_prompts(monkeypatch, answers):
    answers = list(answers)
    monkeypatch.setattr(
        "folio.cli.questionary.text", lambda *args, **kwargs: FakeQuestion(answers.pop(0))
    )


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_new_scaffolds_valid_project(monkeypatch, tmp_path):
    runner = CliRunner()
    target = tmp_path / "mysite"
    result = runner.invoke(cli, ["new", str(target)], env={"FOLIO_SKIP_GIT_INIT": "1"})
    assert result.exit_code == 0
    assert (target / "folio.yaml").exists()
    assert (target / "src/data/blog/hello-world.mdx").exists()
    assert (target / "public/opt/images").is_dir()

    monkeypatch.chdir(target)
    result = runner.invoke(cli, ["check"])
    assert result.exit_code == 0, result.output
    assert "blog: 1 entries" in result.output
    assert "projects: 1 entries" in result.output
    assert "work: 1 entries" in result.output
    assert "Content OK for https://example.com" in result.output

    # fails on non-empty directory
    result = runner.invoke(cli, ["new", str(target)], env={"FOLIO_SKIP_GIT_INIT": "1"})
    assert result.exit_code != 0
    assert "non-empty directory" in result.output


def test_check_reports_invalid_entry(monkeypatch, project):
    write(project / "src/data/blog/broken.mdx", "---\ntitle: Broken\n---\n")
    monkeypatch.chdir(project)
    result = CliRunner().invoke(cli, ["check"])
    assert result.exit_code == 1
    assert "Check failed:" in result.output
    assert "broken.mdx" in result.output
    assert "author: Field required" in result.output


def test_check_reports_bad_config(monkeypatch, project):
    write(
        project / "folio.yaml",
        "site: https://dylanbritz.dev\nlocales: {en: en-US, nl: nl-NL}\ndefaultLocale: fr\n",
    )
    monkeypatch.chdir(project)
    result = CliRunner().invoke(cli, ["check"])
    assert result.exit_code == 1
    assert "File: folio.yaml" in result.output
    assert "defaultLocale 'fr'" in result.output


def test_optimize_images(monkeypatch, tmp_path):
    images = tmp_path / "public/opt/images"
    images.mkdir(parents=True)
    Image.new("RGB", (4, 4), color="red").save(images / "hero.jpg")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli, ["optimize-images"])

    assert result.exit_code == 0
    assert result.output == "Images optimized\n"
    assert (images / "hero.webp").exists()


def test_optimize_images_failure(monkeypatch, tmp_path):
    images = tmp_path / "public/opt/images"
    images.mkdir(parents=True)
    (images / "broken.png").write_bytes(b"nope")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli, ["optimize-images"])

    assert result.exit_code == 1
    assert "Image optimization failed:" in result.output
    assert "Images optimized" not in result.output


def test_post_creates_valid_entry(monkeypatch, project):
    monkeypatch.chdir(project)
    fake_prompts(monkeypatch, ["My First Post", "Dylan", "python, astro"])

    result = CliRunner().invoke(cli, ["post"])

    assert result.exit_code == 0, result.output
    target = project / f"src/data/blog/{date.today().isoformat()}-my-first-post.mdx"
    assert target.exists()
    text = target.read_text(encoding="utf-8")
    assert text.startswith("---\ntitle: My First Post\nauthor: Dylan\n")
    assert "- python\n- astro\n" in text

    result = CliRunner().invoke(cli, ["check"])
    assert "blog: 2 entries" in result.output


def test_post_rejects_slug_collision(monkeypatch, project):
    monkeypatch.chdir(project)
    fake_prompts(monkeypatch, ["Hello", "Dylan", ""])
    result = CliRunner().invoke(cli, ["post"])
    assert result.exit_code != 0
    assert "already exists: 2024-01-15-hello.mdx" in result.output


def test_post_aborts_on_cancel(monkeypatch, project):
    monkeypatch.chdir(project)
    fake_prompts(monkeypatch, [None])
    result = CliRunner().invoke(cli, ["post"])
    assert result.exit_code == 1


def test_post_requires_project(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["post"])
    assert result.exit_code != 0
    assert "No folio.yaml found" in result.output


def test_extract_slug():
    assert _extract_slug("2024-01-15-Hello-World.mdx") == "hello-world"
    assert _extract_slug("notes.mdx") == "notes"


def test_module_main_entrypoint():
    from folio.__main__ import main

    assert callable(main)


def test_check_reports_impossible_date(monkeypatch, project):
    write(
        project / "src/data/blog/leap.mdx",
        "---\ntitle: Leap\nauthor: A\ndate: 2024-02-30\n---\n",
    )
    monkeypatch.chdir(project)
    result = CliRunner().invoke(cli, ["check"])
    assert result.exit_code == 1
    assert "Check failed:" in result.output
    assert "leap.mdx" in result.output
    assert "Traceback" not in result.output
