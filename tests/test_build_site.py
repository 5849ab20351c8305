"""End-to-end tests for the static build into a temporary directory."""
import json

import pytest

from build_site import build, main, render_index_page
from project_store import LoadError
from settings import BuildConfig
from view_controller import HomeView


@pytest.fixture
def site(tmp_path, full_payload):
    src = tmp_path / "src"
    (src / "data").mkdir(parents=True)
    (src / "styles").mkdir()
    (src / "styles" / "main.css").write_text("body { color: red; }", encoding="utf-8")
    (src / "styles" / "notes.txt").write_text("not css", encoding="utf-8")
    data_file = src / "data" / "projects.json"
    data_file.write_text(json.dumps(full_payload), encoding="utf-8")

    public = tmp_path / "public"
    (public / "img").mkdir(parents=True)
    (public / "favicon.ico").write_bytes(b"\x00\x01")
    (public / "img" / "logo.svg").write_text("<svg/>", encoding="utf-8")

    return BuildConfig(
        src_dir=src,
        public_dir=public,
        dist_dir=tmp_path / "dist",
        data_file=data_file,
        base_path="my-portfolio/",
    )


def test_build_writes_every_page(site):
    store = build(site)
    dist = site.dist_dir

    assert len(store) == 3
    assert (dist / "index.html").exists()
    assert (dist / "projects" / "index.html").exists()
    for project_id in ("weather", "pipeline", "todo"):
        assert (dist / "projects" / project_id / "index.html").exists()


def test_build_copies_assets(site):
    build(site)
    dist = site.dist_dir

    assert (dist / "favicon.ico").read_bytes() == b"\x00\x01"
    assert (dist / "img" / "logo.svg").exists()
    assert (dist / "css" / "main.css").exists()
    assert not (dist / "css" / "notes.txt").exists()
    assert json.loads((dist / "projects.json").read_text(encoding="utf-8"))["config"]["siteName"] == "Jane Dev"


def test_index_page_contents(site):
    build(site)
    html = (site.dist_dir / "index.html").read_text(encoding="utf-8")

    assert "<title>Jane Dev — Portfolio</title>" in html
    assert html.count('<article class="card"') == 3
    assert '<span class="filters-count" id="projectCount">(3 of 3)</span>' in html
    assert '<option value="Apache Kafka">Apache Kafka</option>' in html
    assert 'href="/my-portfolio/css/main.css"' in html
    assert "const projects = [" in html
    assert html.count('href="/my-portfolio/projects/weather/"') == 2
    assert html.count('href="/my-portfolio/projects/pipeline/"') == 2
    assert 'href="/projects/weather/"' not in html


def test_detail_pages(site):
    build(site)
    weather = (site.dist_dir / "projects" / "weather" / "index.html").read_text(encoding="utf-8")
    todo = (site.dist_dir / "projects" / "todo" / "index.html").read_text(encoding="utf-8")
    missing = (site.dist_dir / "projects" / "index.html").read_text(encoding="utf-8")

    assert "<title>Weather Dashboard — Jane Dev</title>" in weather
    assert '<meta property="og:title" content="[WebApp] Weather Dashboard">' in weather
    assert "mermaid.min.js" in weather
    assert "giscus.app/client.js" in weather

    assert "project-link-btn" not in todo
    assert "mermaid.min.js" not in todo

    assert "PROJECT VANISHED" in missing


def test_rebuild_overwrites_without_wiping(site):
    site.dist_dir.mkdir(parents=True)
    keep = site.dist_dir / "CNAME"
    keep.write_text("jane.dev", encoding="utf-8")

    build(site)
    build(site)

    assert keep.read_text(encoding="utf-8") == "jane.dev"


def test_build_fails_on_bad_data(site):
    site.data_file.write_text('{"projects": [{"id": "a"}, {"id": "a"}]}', encoding="utf-8")
    with pytest.raises(LoadError):
        build(site)


def test_index_page_error_state(tmp_path):
    view = HomeView.open(tmp_path / "missing.json")
    html = render_index_page(view)
    assert "Failed to load projects" in html
    assert "const projects" not in html


def test_main_exit_codes(site, tmp_path):
    args = ["--src", str(site.src_dir), "--public", str(site.public_dir),
            "--output", str(site.dist_dir), "--log-level", "WARNING"]

    assert main(args + ["--data", str(site.data_file)]) == 0
    assert main(args + ["--data", str(tmp_path / "missing.json")]) == 1


def test_failed_data_copy_is_skipped(site):
    # A directory in the way makes the projects.json copy fail
    (site.dist_dir / "projects.json").mkdir(parents=True)

    build(site)

    assert (site.dist_dir / "projects.json").is_dir()
    assert (site.dist_dir / "index.html").exists()


def test_traversing_project_id_is_rejected(site, tmp_path):
    site.data_file.write_text('{"projects": [{"id": "../../escaped"}]}', encoding="utf-8")

    with pytest.raises(LoadError):
        build(site)

    assert not (tmp_path / "escaped" / "index.html").exists()
