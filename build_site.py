#!/usr/bin/env python3
"""
Portfolio Site Builder
======================
Copies static assets and pre-renders the portfolio pages from projects.json.

Usage:
    python build_site.py [--data PATH] [--output PATH] [--base-path /my-portfolio]

Produces:
    dist/
      index.html               - project list with filters
      projects.json            - the data document, for client-side reloads
      css/                     - stylesheets from src/styles
      projects/index.html      - not-found page for unknown project ids
      projects/<id>/index.html - one detail page per project

Configuration via environment variables or .env file (see settings.py).
"""

import argparse
import json
import logging
import shutil
import sys
from datetime import datetime
from html import escape
from pathlib import Path

from project_store import PortfolioError, ProjectStore
from settings import LOG_LEVEL, BuildConfig, configure_logging
from templates import render_filter_options
from view_controller import DetailView, HomeView, ViewState

log = logging.getLogger("portfolio.build")

MERMAID_CDN = "https://cdn.jsdelivr.net/npm/mermaid@10/dist/mermaid.min.js"

PAGE_STYLE = """
        :root {
            --bg: #0a0a0f;
            --surface: #12121a;
            --surface-hover: #1a1a28;
            --border: #2a2a3a;
            --text: #e8e8f0;
            --text-muted: #8888a0;
            --accent: #00e5a0;
            --error: #ff6b6b;
        }

        * { margin: 0; padding: 0; box-sizing: border-box; }

        body {
            font-family: 'Space Mono', monospace;
            background: var(--bg);
            color: var(--text);
            min-height: 100vh;
        }

        header, main, footer { max-width: 1400px; margin: 0 auto; padding: 2rem; }
        h1 { font-size: clamp(2rem, 5vw, 3.5rem); line-height: 1.1; }
        .header-subtitle { color: var(--text-muted); margin-top: 0.75rem; }
        .filters { display: flex; gap: 0.5rem; flex-wrap: wrap; align-items: center; margin-bottom: 1.5rem; }
        .filters select, .filters input {
            background: var(--surface); color: var(--text);
            border: 1px solid var(--border); padding: 0.5rem 0.75rem; font: inherit;
        }
        .filters-count { color: var(--accent); }
        .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(320px, 1fr)); gap: 1.5rem; }
        .card { background: var(--surface); border: 1px solid var(--border); padding: 1.5rem; }
        .card:hover { background: var(--surface-hover); }
        .card h3 a, .view-btn { color: var(--text); text-decoration: none; }
        .card-description { color: var(--text-muted); margin: 0.75rem 0; font-size: 0.85rem; }
        .view-btn { display: inline-block; margin-top: 1rem; color: var(--accent); }
        .project-link-btn { color: var(--text); border: 1px solid var(--border); padding: 0.4rem 0.8rem; text-decoration: none; }
        .project-link-btn.primary { border-color: var(--accent); color: var(--accent); }
        .section-label { margin: 2rem 0 0.75rem; color: var(--accent); }
        .gallery-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(280px, 1fr)); gap: 1rem; }
        .gallery-item img { width: 100%; }
        .state { text-align: center; padding: 4rem 2rem; color: var(--text-muted); }
        .state-error { color: var(--error); }
        .matrix-wrap { text-align: center; padding: 6rem 2rem; color: var(--accent); }
        footer { text-align: center; color: var(--text-muted); font-size: 0.75rem; border-top: 1px solid var(--border); }

        @media (max-width: 768px) {
            .grid { grid-template-columns: 1fr; }
            header, main, footer { padding: 1rem; }
        }
"""

# Mirrors filters.matches() for in-browser filtering of the pre-rendered cards
FILTER_SCRIPT = """
    const projects = %s;
    const controls = ['yearFilter', 'techFilter', 'typeFilter', 'searchInput']
        .map(id => document.getElementById(id));
    const countEl = document.getElementById('projectCount');

    function applyFilters() {
        const [year, tech, type, search] = controls.map(el => el.value);
        const query = search.toLowerCase().trim();
        let visible = 0;
        projects.forEach(p => {
            const ok = (!year || String(p.year) === year)
                && (!tech || p.tech.includes(tech))
                && (!type || p.type === type)
                && (!query || p.title.toLowerCase().includes(query)
                    || p.description.toLowerCase().includes(query));
            document.getElementById('card-' + p.id).style.display = ok ? '' : 'none';
            if (ok) visible++;
        });
        countEl.textContent = '(' + visible + ' of ' + projects.length + ')';
    }

    controls.forEach(el => el.addEventListener(el.tagName === 'INPUT' ? 'input' : 'change', applyFilters));
"""


# ---------------------------------------------------------------------------
# Asset copying
# ---------------------------------------------------------------------------

def copy_dir(src: Path, dest: Path) -> int:
    """Recursively copy a directory, overwriting existing files. Returns files copied."""
    dest.mkdir(parents=True, exist_ok=True)
    copied = 0
    for entry in sorted(src.iterdir()):
        target = dest / entry.name
        if entry.is_dir():
            copied += copy_dir(entry, target)
            continue
        try:
            shutil.copyfile(entry, target)
            copied += 1
        except OSError as e:
            log.warning(f"Failed to copy {entry}: {e}")
    return copied


def prepare_dist(config: BuildConfig):
    # Never wiped, only created
    config.dist_dir.mkdir(parents=True, exist_ok=True)
    log.info(f"Dist directory ready: {config.dist_dir}")


def copy_static_assets(config: BuildConfig):
    log.info("Copying static assets...")

    if config.public_dir.exists():
        count = copy_dir(config.public_dir, config.dist_dir)
        log.info(f"Public assets copied ({count} files)")

    if config.styles_dir.exists():
        css_dir = config.dist_dir / "css"
        css_dir.mkdir(parents=True, exist_ok=True)
        css_files = sorted(config.styles_dir.glob("*.css"))
        for css in css_files:
            try:
                shutil.copyfile(css, css_dir / css.name)
            except OSError as e:
                log.warning(f"Failed to copy {css}: {e}")
        log.info(f"Styles copied ({len(css_files)} files)")

    if config.data_file.exists():
        try:
            shutil.copyfile(config.data_file, config.dist_dir / "projects.json")
            log.info("Projects data copied")
        except OSError as e:
            log.warning(f"Failed to copy {config.data_file}: {e}")


# ---------------------------------------------------------------------------
# Page rendering
# ---------------------------------------------------------------------------

def render_page(title: str, body: str, base_path: str = "", head_extra: str = "",
                scripts: str = "", stylesheets=()) -> str:
    links = "".join(
        f'\n    <link rel="stylesheet" href="{base_path}/css/{escape(name)}">' for name in stylesheets
    )
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
    {head_extra}{links}
    <style>{PAGE_STYLE}    </style>
</head>
<body>
{body}
    <footer>
        <p>&copy; <span id="yearNow">{datetime.now().year}</span> &middot; Built {datetime.now().strftime("%Y-%m-%d")}</p>
    </footer>
{scripts}
</body>
</html>"""


def _filter_payload(projects) -> str:
    data = [
        {
            "id": p.id,
            "year": p.year,
            "type": p.type,
            "tech": list(p.tech),
            "title": p.title,
            "description": p.description,
        }
        for p in projects
    ]
    # Keep the embedded JSON from closing the script element
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")


def render_index_page(view: HomeView, stylesheets=()) -> str:
    config = view.config
    site_name = config.site_name or "Portfolio"

    if view.state is not ViewState.READY:
        body = f"""
    <header><h1>{escape(site_name)}</h1></header>
    <main id="listView">{view.render()}</main>"""
        return render_page(f"{site_name} — Portfolio", body, view.base_path, stylesheets=stylesheets)

    body = f"""
    <header>
        <h1><span class="header-icon">&#128104;&#8205;&#128187;</span><span class="header-name">{escape(site_name)}</span></h1>
        <p class="header-subtitle">{escape(config.tagline)}</p>
    </header>

    <main>
        <div class="filters">
            <h2 class="filters-title">&#128269; Filter Projects <span class="filters-count" id="projectCount">{view.count_label}</span></h2>
            <select id="yearFilter" aria-label="Year">{render_filter_options(view.years, "All years")}</select>
            <select id="techFilter" aria-label="Technology">{render_filter_options(view.technologies, "All technologies")}</select>
            <select id="typeFilter" aria-label="Type">{render_filter_options(view.types, "All types")}</select>
            <input id="searchInput" type="search" placeholder="Search projects..." aria-label="Search">
        </div>
        <div class="grid" id="listView">{view.render()}</div>
    </main>"""

    scripts = f"    <script>{FILTER_SCRIPT % _filter_payload(view.store.projects)}    </script>"
    return render_page(f"{site_name} — Portfolio", body, view.base_path, scripts=scripts,
                       stylesheets=stylesheets)


def render_detail_page(view: DetailView, base_path: str = "", stylesheets=()) -> str:
    head_extra = f'<meta property="og:title" content="{escape(view.og_title)}">'
    scripts = ""
    project = view.project
    if project and project.details.diagram and project.details.diagram.type == "mermaid":
        scripts = (f'    <script src="{MERMAID_CDN}"></script>\n'
                   f'    <script>mermaid.initialize({{ startOnLoad: true }});</script>')

    body = f"""
    <header><a href="{base_path}/" class="back-link">&larr; All projects</a></header>
    <main id="projectDetail">{view.render()}</main>"""
    return render_page(view.title, body, base_path, head_extra=head_extra, scripts=scripts,
                       stylesheets=stylesheets)


def write_page(path: Path, html: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")


def build_pages(config: BuildConfig, store: ProjectStore) -> int:
    """Write index, catch-all and per-project pages. Returns project pages written."""
    log.info("Building HTML pages...")
    base_path = config.normalised_base_path()
    stylesheets = [css.name for css in sorted(config.styles_dir.glob("*.css"))]

    home = HomeView(store, base_path=base_path)
    write_page(config.dist_dir / "index.html", render_index_page(home, stylesheets))
    log.info("Index page built")

    # Catch-all /projects/index.html for non-existent projects
    not_found = DetailView(ViewState.NOT_FOUND, config=store.config)
    write_page(config.dist_dir / "projects" / "index.html",
               render_detail_page(not_found, base_path, stylesheets))

    for project in store.projects:
        view = DetailView.for_store(store, f"/projects/{project.id}/")
        write_page(config.dist_dir / "projects" / project.id / "index.html",
                   render_detail_page(view, base_path, stylesheets))
        log.debug(f"  {project.id} -> projects/{project.id}/index.html")

    log.info(f"Generated {len(store.projects)} project pages")
    return len(store.projects)


def build(config: BuildConfig) -> ProjectStore:
    """Run the full build. Raises PortfolioError or OSError on failure."""
    prepare_dist(config)
    copy_static_assets(config)
    store = ProjectStore.load(config.data_file)
    build_pages(config, store)
    return store


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def parse_args(argv=None) -> argparse.Namespace:
    defaults = BuildConfig()
    parser = argparse.ArgumentParser(description="Build the static portfolio site.")
    parser.add_argument("--src", type=Path, default=defaults.src_dir, help="source directory")
    parser.add_argument("--public", type=Path, default=defaults.public_dir, help="public assets directory")
    parser.add_argument("--data", type=Path, default=defaults.data_file, help="projects.json path")
    parser.add_argument("--output", type=Path, default=defaults.dist_dir, help="output directory")
    parser.add_argument("--base-path", default=defaults.base_path,
                        help="deployment sub-path, e.g. /my-portfolio")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="logging level")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level.upper())

    config = BuildConfig(
        src_dir=args.src,
        public_dir=args.public,
        dist_dir=args.output,
        data_file=args.data,
        base_path=args.base_path,
    )

    log.info("=" * 60)
    log.info("STARTING BUILD")
    log.info("=" * 60)

    try:
        store = build(config)
    except (PortfolioError, OSError) as e:
        log.error(f"Build failed: {e}")
        return 1

    log.info("=" * 60)
    log.info("BUILD COMPLETE")
    log.info(f"   Projects:      {len(store)}")
    log.info(f"   Technologies:  {len(store.technologies())}")
    log.info(f"   Output:        {config.dist_dir.absolute()}")
    log.info("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
