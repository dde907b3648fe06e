"""Tests for template bootstrap and rendering."""

from pathlib import Path

import pytest
from lsrv.core.renderer import TemplateSet, bootstrap_templates
from lsrv.core.types import Page
from lsrv.errors import RenderError, TemplateLoadError


@pytest.fixture
def templates(tmp_path: Path) -> TemplateSet:
    """Load the default templates from a fresh directory."""
    bootstrap_templates(tmp_path)
    return TemplateSet.load(tmp_path)


class TestBootstrapTemplates:
    """Tests for bootstrap_templates()."""

    def test__empty_dir__writes_both_templates(self, tmp_path: Path) -> None:
        """Write view.html and edit.html into an empty directory."""
        written = bootstrap_templates(tmp_path)

        assert sorted(p.name for p in written) == ["edit.html", "view.html"]
        assert (tmp_path / "view.html").is_file()
        assert (tmp_path / "edit.html").is_file()

    def test__missing_dir__is_created(self, tmp_path: Path) -> None:
        """Create the template directory if needed."""
        template_dir = tmp_path / "nested" / "templates"

        bootstrap_templates(template_dir)

        assert (template_dir / "view.html").is_file()

    def test__existing_template__left_untouched(self, tmp_path: Path) -> None:
        """Keep a customised template instead of overwriting it."""
        (tmp_path / "view.html").write_text("<p>custom {{ title }}</p>")

        written = bootstrap_templates(tmp_path)

        assert [p.name for p in written] == ["edit.html"]
        assert (tmp_path / "view.html").read_text() == "<p>custom {{ title }}</p>"


class TestTemplateSetLoad:
    """Tests for TemplateSet.load()."""

    def test__both_templates__loads(self, templates: TemplateSet) -> None:
        """Load the view and edit templates."""
        assert set(templates.names) == {"view", "edit"}

    def test__missing_template__raises_error(self, tmp_path: Path) -> None:
        """Fail at load time when a template file is absent."""
        (tmp_path / "view.html").write_text("<h1>{{ title }}</h1>")

        with pytest.raises(TemplateLoadError, match="edit.html"):
            TemplateSet.load(tmp_path)

    def test__malformed_template__raises_error(self, tmp_path: Path) -> None:
        """Fail at load time when a template does not compile."""
        bootstrap_templates(tmp_path)
        (tmp_path / "edit.html").write_text("<h1>{{ title </h1>")

        with pytest.raises(TemplateLoadError):
            TemplateSet.load(tmp_path)

    def test__template_changed_after_load__not_reloaded(self, tmp_path: Path) -> None:
        """Keep serving the templates compiled at startup."""
        bootstrap_templates(tmp_path)
        templates = TemplateSet.load(tmp_path)
        (tmp_path / "view.html").write_text("<p>changed</p>")

        html = templates.render("view", Page(title="FrontPage", body=b"x"))

        assert "changed" not in html
        assert "FrontPage" in html


class TestTemplateSetRender:
    """Tests for TemplateSet.render()."""

    def test__view__shows_title_body_and_edit_link(self, templates: TemplateSet) -> None:
        """Render heading, edit link and body."""
        html = templates.render("view", Page(title="FrontPage", body=b"Hello there"))

        assert "<h1>FrontPage</h1>" in html
        assert 'href="/edit/FrontPage"' in html
        assert "Hello there" in html

    def test__edit__shows_form_posting_to_save(self, templates: TemplateSet) -> None:
        """Render a form posting to /save/<title> with the body pre-filled."""
        html = templates.render("edit", Page(title="FrontPage", body=b"Draft text"))

        assert "Editing FrontPage" in html
        assert 'action="/save/FrontPage"' in html
        assert 'method="POST"' in html
        assert 'name="body"' in html
        assert "Draft text</textarea>" in html
        assert 'type="submit"' in html

    def test__edit_empty_page__renders_empty_textarea(self, templates: TemplateSet) -> None:
        """Render a blank form for a page with no body."""
        html = templates.render("edit", Page(title="NewPage"))

        assert "></textarea>" in html

    def test__body_with_markup__is_escaped(self, templates: TemplateSet) -> None:
        """Never inject raw HTML from a page body."""
        page = Page(title="Evil", body=b"<script>alert('x')</script> & more")

        html = templates.render("view", page)

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "&amp; more" in html

    def test__non_utf8_body__renders(self, templates: TemplateSet) -> None:
        """Render bodies that are not valid UTF-8."""
        html = templates.render("view", Page(title="Binary", body=b"ok \xff\xfe"))

        assert "ok" in html

    def test__unknown_template__raises_render_error(self, templates: TemplateSet) -> None:
        """Refuse to render a template that was never loaded."""
        with pytest.raises(RenderError, match="no such template"):
            templates.render("history", Page(title="FrontPage"))

    def test__undefined_field__raises_render_error(self, tmp_path: Path) -> None:
        """Surface execution failures as RenderError."""
        bootstrap_templates(tmp_path)
        (tmp_path / "view.html").write_text("<h1>{{ page.author.name }}</h1>")
        templates = TemplateSet.load(tmp_path)

        with pytest.raises(RenderError):
            templates.render("view", Page(title="FrontPage"))

    @pytest.mark.parametrize(
        ("source", "message"),
        [
            ("{{ 1 // 0 }}", "division"),
            ("{{ title.nosuchmethod() }}", "nosuchmethod"),
            ("{{ title.upper(1) }}", "takes no arguments"),
        ],
    )
    def test__expression_raises__wrapped_in_render_error(
        self,
        tmp_path: Path,
        source: str,
        message: str,
    ) -> None:
        """Wrap any error raised while the template runs, keeping its text."""
        bootstrap_templates(tmp_path)
        (tmp_path / "view.html").write_text(source)
        templates = TemplateSet.load(tmp_path)

        with pytest.raises(RenderError, match=message):
            templates.render("view", Page(title="FrontPage", body=b"12"))
