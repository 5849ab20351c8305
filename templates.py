"""
HTML fragment generators for project cards, the detail view and page states.

Every function here is pure: same project in, same markup out. Optional detail
sections (links, gallery, diagram, discussions) render as '' when absent.
"""

from html import escape
from typing import Iterable, Optional

from badges import (
    tech_badges,
    type_badge,
    type_badge_detail,
    year_badge,
    year_badge_detail,
)
from project_store import Diagram, Project, ProjectLinks

GISCUS_CLIENT = "https://giscus.app/client.js"

GISCUS_DEFAULTS = {
    "mapping": "pathname",
    "strict": "0",
    "reactionsEnabled": "1",
    "emitMetadata": "0",
    "inputPosition": "top",
    "theme": "preferred_color_scheme",
    "lang": "en",
    "loading": "lazy",
}

# (config key, script attribute), in the order giscus documents them
_GISCUS_ATTRIBUTES = [
    ("repo", "data-repo"),
    ("repoId", "data-repo-id"),
    ("category", "data-category"),
    ("categoryId", "data-category-id"),
    ("mapping", "data-mapping"),
    ("term", "data-term"),
    ("strict", "data-strict"),
    ("reactionsEnabled", "data-reactions-enabled"),
    ("emitMetadata", "data-emit-metadata"),
    ("inputPosition", "data-input-position"),
    ("theme", "data-theme"),
    ("lang", "data-lang"),
    ("loading", "data-loading"),
]

GITHUB_ICON = (
    '<svg class="link-icon" viewBox="0 0 16 16" width="16" height="16"><path fill="currentColor" '
    'd="M8 0C3.58 0 0 3.58 0 8c0 3.54 2.29 6.53 5.47 7.59.4.07.55-.17.55-.38 0-.19-.01-.82-.01-1.49'
    '-2.01.37-2.53-.49-2.69-.94-.09-.23-.48-.94-.82-1.13-.28-.15-.68-.52-.01-.53.63-.01 1.08.58 1.23.82'
    '.72 1.21 1.87.87 2.33.66.07-.52.28-.87.51-1.07-1.78-.2-3.64-.89-3.64-3.95 0-.87.31-1.59.82-2.15'
    '-.08-.2-.36-1.02.08-2.12 0 0 .67-.21 2.2.82.64-.18 1.32-.27 2-.27.68 0 1.36.09 2 .27 1.53-1.04 '
    '2.2-.82 2.2-.82.44 1.1.16 1.92.08 2.12.51.56.82 1.27.82 2.15 0 3.07-1.87 3.75-3.65 3.95.29.25.54'
    '.73.54 1.48 0 1.07-.01 1.93-.01 2.2 0 .21.15.46.55.38A8.013 8.013 0 0016 8c0-4.42-3.58-8-8-8z">'
    '</path></svg>'
)

DEMO_ICON = (
    '<svg class="link-icon" viewBox="0 0 16 16" width="16" height="16"><path fill="currentColor" '
    'd="M8 0C3.58 0 0 3.58 0 8s3.58 8 8 8 8-3.58 8-8-3.58-8-8-8zm3.5 11.5l-3.5-2.5-3.5 2.5V4h7v7.5z">'
    '</path></svg>'
)


def project_href(project: Project, base_path: str = "") -> str:
    """Link to a project page; root-relative URLs get the deployment base path."""
    url = project.url or f"/projects/{project.id}/"
    if not base_path or not url.startswith("/") or url.startswith("//"):
        return url
    if url == base_path or url.startswith(f"{base_path}/"):
        return url
    return f"{base_path}{url}"


# ---------------------------------------------------------------------------
# List view
# ---------------------------------------------------------------------------

def render_card(project: Project, base_path: str = "") -> str:
    href = escape(project_href(project, base_path))
    return f"""
    <article class="card" id="card-{escape(project.id)}" data-project-id="{escape(project.id)}">
      <div class="card-icon">{escape(project.icon)}</div>
      <h3><a href="{href}">{escape(project.title)}</a></h3>
      <div class="card-badges">
        {year_badge(project.year)}
        {type_badge(project.type)}
      </div>
      <p class="card-description">{escape(project.description)}</p>
      <div class="tech-stack">
        {tech_badges(project.tech, small=True)}
      </div>
      <a class="view-btn" href="{href}">
        <span class="btn-icon">&#128073;</span> View Project
      </a>
    </article>
    """


def render_cards(projects: Iterable[Project], base_path: str = "") -> str:
    return "".join(render_card(p, base_path) for p in projects)


def render_filter_options(values: Iterable, all_label: str = "All") -> str:
    """<option> elements for one filter select, starting with the wildcard."""
    options = [f'<option value="">{escape(all_label)}</option>']
    # Controls submit text, so 2023 and "2023" are one option; "" is the wildcard
    for value in dict.fromkeys(str(v) for v in values):
        if not value:
            continue
        text = escape(value)
        options.append(f'<option value="{text}">{text}</option>')
    return "".join(options)


# ---------------------------------------------------------------------------
# Detail view
# ---------------------------------------------------------------------------

def _link_button(url: str, label: str, icon: str, primary: bool = False) -> str:
    if not url:
        return ""
    css_class = "project-link-btn primary" if primary else "project-link-btn"
    return (f'<a href="{escape(url)}" class="{css_class}" target="_blank" rel="noopener">'
            f'{icon} {label}</a>')


def render_links(links: Optional[ProjectLinks]) -> str:
    if links is None:
        return ""
    return (_link_button(links.github, "GitHub", GITHUB_ICON)
            + _link_button(links.demo, "Live Demo", DEMO_ICON, primary=True))


def render_gallery(images: Iterable[str], project_title: str) -> str:
    images = list(images or ())
    if not images:
        return ""
    alt = escape(project_title)
    items = "".join(
        f'<div class="gallery-item"><img src="{escape(img)}" alt="{alt}" loading="lazy" /></div>'
        for img in images
    )
    return f"""
    <div class="project-gallery">
      <h3 class="section-label">Gallery</h3>
      <div class="gallery-grid">{items}</div>
    </div>
    """


def render_diagram(diagram: Optional[Diagram]) -> str:
    if diagram is None or not diagram.code:
        return ""
    css_class = "mermaid" if diagram.type == "mermaid" else "diagram-code"
    return f"""
    <div class="project-diagram">
      <h3 class="section-label">Architecture</h3>
      <div class="diagram-container">
        <pre class="{css_class}">{escape(diagram.code)}</pre>
      </div>
    </div>
    """


def render_giscus_script(giscus: Optional[dict]) -> str:
    """Comment widget loader; needs at least repoId and categoryId."""
    if not giscus or not giscus.get("repoId") or not giscus.get("categoryId"):
        return ""
    attrs = [f'src="{GISCUS_CLIENT}"']
    for key, attr in _GISCUS_ATTRIBUTES:
        value = giscus.get(key) or GISCUS_DEFAULTS.get(key)
        if value:
            attrs.append(f'{attr}="{escape(str(value))}"')
    attrs.append('crossorigin="anonymous"')
    return f"<script {' '.join(attrs)} async></script>"


def render_discussions(giscus: Optional[dict]) -> str:
    if not giscus:
        return ""
    return f"""
    <div class="project-discussions">
      <div class="giscus"></div>
      {render_giscus_script(giscus)}
    </div>
    """


def render_detail(project: Project) -> str:
    details = project.details
    return f"""
    <div class="project-hero">
      <div class="project-header-row">
        <div class="project-title-section">
          <div class="project-icon-large">{escape(project.icon)}</div>
          <div class="project-title-wrapper">
            <h1 class="project-title">{escape(project.title)}</h1>
            <p class="project-summary">{escape(details.summary)}</p>
          </div>
        </div>
        <div class="project-links">
          {render_links(details.links)}
        </div>
      </div>

      <div class="project-meta-section">
        <div class="project-meta-badges">
          {year_badge_detail(project.year)}
          {type_badge_detail(project.type)}
        </div>
        <div class="tech-badges-grid">
          {tech_badges(project.tech)}
        </div>
      </div>
    </div>

    <div class="project-content">
      <h3 class="section-label">About</h3>
      <p>{escape(details.content)}</p>
    </div>
    {render_gallery(details.images, project.title)}
    {render_diagram(details.diagram)}
    {render_discussions(details.giscus)}
    """


# ---------------------------------------------------------------------------
# Page states
# ---------------------------------------------------------------------------

def render_loading() -> str:
    return """
    <div class="state state-loading">
      <div class="state-icon">&#9203;</div>
      <p>Loading projects...</p>
    </div>
    """


def render_load_error(message: str) -> str:
    return f"""
    <div class="state state-error">
      <div class="state-icon">&#9888;&#65039;</div>
      <p>Failed to load projects. Please try again later.</p>
      <p class="state-detail">Error: {escape(message)}</p>
    </div>
    """


def render_not_found() -> str:
    return """
    <div class="matrix-wrap not-found">
      <div class="matrix-content">
        <h1 id="neon-title" data-text="PROJECT VANISHED">PROJECT VANISHED</h1>
        <p>Signal drowned in the data stream. No retrievable record.</p>
      </div>
    </div>
    """
