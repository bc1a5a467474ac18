"""Tests for web.templates module."""

from __future__ import annotations

from pathlib import Path

import pytest

from timetrack_summary.presenters import LandingViewModel, SummaryErrorViewModel
from timetrack_summary.web.templates import TemplateRegistry


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Directory with a single greeting template."""
    (tmp_path / "hello.html").write_text("Hello {{ vm }}{{ suffix }}", encoding="utf-8")
    return tmp_path


class TestBundledTemplates:
    """Tests against the templates shipped with the package."""

    def test_names(self) -> None:
        registry = TemplateRegistry()

        assert {"index.html", "summary.html", "layout.html"} <= set(registry.names)

    def test_error_page_renders_messages(self) -> None:
        """Verifies the summary template renders its chrome around an error.

        Business context:
        A failed load must still show the interval picker so the user can
        pick a valid interval.
        """
        registry = TemplateRegistry(globals={"version": "9.9.9", "base_path": ""})
        vm = SummaryErrorViewModel(error="invalid interval 'fortnight'", status=400)

        html = registry.render("summary.html", vm, base_path="")

        assert "invalid interval &#39;fortnight&#39;" in html
        assert 'href="/summary?interval=week"' in html
        assert "v9.9.9" in html

    def test_landing_page_escapes_error(self) -> None:
        registry = TemplateRegistry()
        vm = LandingViewModel(error="<script>alert(1)</script>")

        html = registry.render("index.html", vm, base_path="/tracker")

        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html
        assert 'href="/tracker/summary"' in html


class TestReloadLifecycle:
    """Tests for production versus development template loading."""

    def test_render_passes_view_model_and_context(self, template_dir: Path) -> None:
        registry = TemplateRegistry(template_dir)

        assert registry.render("hello.html", "alice", suffix="!") == "Hello alice!"

    def test_unknown_template(self, template_dir: Path) -> None:
        registry = TemplateRegistry(template_dir)

        with pytest.raises(KeyError):
            registry.render("missing.html", None)

    def test_production_keeps_compiled_templates(self, template_dir: Path) -> None:
        """Verifies edits on disk are ignored without reload_on_access.

        Arrangement:
        Registry built, then the template file rewritten.

        Assertion Strategy:
        Render output still reflects the original template.
        """
        registry = TemplateRegistry(template_dir, reload_on_access=False)
        (template_dir / "hello.html").write_text("Bye {{ vm }}", encoding="utf-8")

        assert registry.render("hello.html", "alice") == "Hello alice"

    def test_dev_reloads_before_render(self, template_dir: Path) -> None:
        """Verifies template edits show up on the next render in dev mode.

        Business context:
        Designers tweak templates while the server runs; a restart for
        every change slows them down.
        """
        registry = TemplateRegistry(template_dir, reload_on_access=True)
        (template_dir / "hello.html").write_text("Bye {{ vm }}", encoding="utf-8")
        (template_dir / "new.html").write_text("New", encoding="utf-8")

        assert registry.render("hello.html", "alice") == "Bye alice"
        assert "new.html" in registry.names

    def test_globals_available(self, template_dir: Path) -> None:
        (template_dir / "version.html").write_text("v{{ version }}", encoding="utf-8")
        registry = TemplateRegistry(template_dir, globals={"version": "1.2.3"})

        assert registry.render("version.html", None) == "v1.2.3"
