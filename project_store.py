"""
Project Store
=============
Loads the portfolio JSON document (site ``config`` plus a ``projects`` list)
once and exposes it as immutable records.

The document is fetched from an ``http(s)://`` URL with requests, or read from
a local path during the static build. Everything after the fetch is pure.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import requests

from settings import FETCH_TIMEOUT

log = logging.getLogger("portfolio.store")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class PortfolioError(Exception):
    """Base class for portfolio failures."""


class LoadError(PortfolioError):
    """The project document could not be fetched or is not well formed."""


class NotFoundError(PortfolioError):
    """No project with the requested id."""

    def __init__(self, project_id: str):
        super().__init__(f"Project not found: {project_id!r}")
        self.project_id = project_id


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------

Year = Union[int, str]


@dataclass(frozen=True)
class ProjectLinks:
    github: str = ""
    demo: str = ""


@dataclass(frozen=True)
class Diagram:
    type: str = ""
    code: str = ""


@dataclass(frozen=True)
class ProjectDetails:
    summary: str = ""
    content: str = ""
    images: tuple = ()
    links: Optional[ProjectLinks] = None
    diagram: Optional[Diagram] = None
    giscus: Optional[dict] = field(default=None, hash=False)


@dataclass(frozen=True)
class Project:
    id: str
    title: str = ""
    description: str = ""
    icon: str = ""
    url: str = ""
    year: Year = ""
    type: str = ""
    tech: tuple = ()  # display order only
    details: ProjectDetails = field(default_factory=ProjectDetails)


@dataclass(frozen=True)
class SiteConfig:
    site_name: str = ""
    tagline: str = ""


@dataclass(frozen=True)
class PortfolioData:
    config: SiteConfig
    projects: tuple


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _year(value: Any) -> Year:
    if isinstance(value, bool):
        return ""
    if isinstance(value, (int, str)):
        return value
    return ""


def _strings(value: Any) -> tuple:
    if not isinstance(value, list):
        return ()
    return tuple(v for v in value if isinstance(v, str))


def _parse_links(raw: Any) -> Optional[ProjectLinks]:
    if not isinstance(raw, dict):
        return None
    links = ProjectLinks(github=_text(raw.get("github")), demo=_text(raw.get("demo")))
    if not links.github and not links.demo:
        return None
    return links


def _parse_diagram(raw: Any) -> Optional[Diagram]:
    if not isinstance(raw, dict) or not _text(raw.get("code")):
        return None
    return Diagram(type=_text(raw.get("type")), code=raw["code"])


def _parse_details(raw: Any) -> ProjectDetails:
    if not isinstance(raw, dict):
        return ProjectDetails()
    giscus = raw.get("giscus")
    return ProjectDetails(
        summary=_text(raw.get("summary")),
        content=_text(raw.get("content")),
        images=_strings(raw.get("images")),
        links=_parse_links(raw.get("links")),
        diagram=_parse_diagram(raw.get("diagram")),
        giscus=dict(giscus) if isinstance(giscus, dict) and giscus else None,
    )


def parse_project(raw: Any) -> Project:
    """Build a Project from one entry of the ``projects`` list."""
    if not isinstance(raw, dict):
        raise LoadError(f"Project entry must be an object, got {type(raw).__name__}")
    project_id = raw.get("id")
    if not isinstance(project_id, str) or not project_id:
        raise LoadError(f"Project entry without a string id: {raw.get('title', '?')!r}")
    if project_id in (".", "..") or "/" in project_id or "\\" in project_id:
        raise LoadError(f"Project id must be a single path segment: {project_id!r}")

    return Project(
        id=project_id,
        title=_text(raw.get("title")),
        description=_text(raw.get("description")),
        icon=_text(raw.get("icon")),
        url=_text(raw.get("url")),
        year=_year(raw.get("year")),
        type=_text(raw.get("type")),
        tech=_strings(raw.get("tech")),
        details=_parse_details(raw.get("details")),
    )


def parse_portfolio(payload: Any) -> PortfolioData:
    """Validate a decoded JSON document and turn it into PortfolioData."""
    if not isinstance(payload, dict):
        raise LoadError("Invalid data format received")

    raw_config = payload.get("config")
    raw_config = raw_config if isinstance(raw_config, dict) else {}
    config = SiteConfig(
        site_name=_text(raw_config.get("siteName")),
        tagline=_text(raw_config.get("tagline")),
    )

    raw_projects = payload.get("projects")
    if raw_projects is None:
        raw_projects = []
    if not isinstance(raw_projects, list):
        raise LoadError("'projects' must be a list")

    projects = []
    seen = set()
    for raw in raw_projects:
        project = parse_project(raw)
        if project.id in seen:
            raise LoadError(f"Duplicate project id: {project.id!r}")
        seen.add(project.id)
        projects.append(project)

    return PortfolioData(config=config, projects=tuple(projects))


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def projects_url(base_url: str = "", base_path: str = "") -> str:
    """Well-known location of projects.json under an optional base path."""
    base_path = base_path.strip("/")
    prefix = f"/{base_path}" if base_path else ""
    return f"{base_url.rstrip('/')}{prefix}/projects.json"


def _fetch_remote(url: str, session: Optional[requests.Session], timeout: float) -> Any:
    http = session or requests
    try:
        resp = http.get(url, timeout=timeout, headers={"Accept": "application/json"})
        resp.raise_for_status()
    except requests.RequestException as e:
        status = getattr(getattr(e, "response", None), "status_code", None)
        message = f"HTTP error! status: {status}" if status else f"Request failed: {e}"
        raise LoadError(message) from e
    try:
        return resp.json()
    except ValueError as e:
        raise LoadError(f"Invalid JSON received from {url}") from e


def _read_local(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise LoadError(f"Could not read {path}: {e.strerror or e}") from e
    except ValueError as e:
        raise LoadError(f"Invalid JSON in {path}: {e}") from e


def load(source: Union[str, Path], session: Optional[requests.Session] = None,
         timeout: float = FETCH_TIMEOUT) -> PortfolioData:
    """Fetch and parse the project document. Raises LoadError on any failure."""
    source_str = str(source)
    try:
        if source_str.startswith(("http://", "https://")):
            payload = _fetch_remote(source_str, session, timeout)
        else:
            payload = _read_local(Path(source))
        data = parse_portfolio(payload)
    except LoadError as e:
        log.error(f"Failed to fetch projects from {source_str}: {e}")
        raise

    log.info(f"Loaded {len(data.projects)} projects from {source_str}")
    return data


# ---------------------------------------------------------------------------
# Lookup & derived option sets
# ---------------------------------------------------------------------------

def find_project_by_id(projects: Iterable[Project], project_id: Optional[str]) -> Optional[Project]:
    if not project_id:
        return None
    for project in projects:
        if project.id == project_id:
            return project
    return None


def _dedupe(values: Iterable) -> list:
    return list(dict.fromkeys(values))  # dedupe preserving order


def unique_years(projects: Iterable[Project]) -> list:
    """Distinct years, most recent first."""
    return sorted(_dedupe(p.year for p in projects), key=str, reverse=True)


def unique_technologies(projects: Iterable[Project]) -> list[str]:
    return sorted(_dedupe(t for p in projects for t in p.tech))


def unique_types(projects: Iterable[Project]) -> list[str]:
    return sorted(_dedupe(p.type for p in projects))


class ProjectStore:
    """Read-only snapshot of one loaded document, indexed by project id."""

    def __init__(self, data: PortfolioData):
        self.data = data
        self._by_id = {p.id: p for p in data.projects}

    @classmethod
    def load(cls, source: Union[str, Path], session: Optional[requests.Session] = None,
             timeout: float = FETCH_TIMEOUT) -> "ProjectStore":
        return cls(load(source, session=session, timeout=timeout))

    @property
    def config(self) -> SiteConfig:
        return self.data.config

    @property
    def projects(self) -> tuple:
        return self.data.projects

    def __len__(self) -> int:
        return len(self.data.projects)

    def find_by_id(self, project_id: Optional[str]) -> Optional[Project]:
        if not project_id:
            return None
        return self._by_id.get(project_id)

    def get(self, project_id: Optional[str]) -> Project:
        project = self.find_by_id(project_id)
        if project is None:
            raise NotFoundError(project_id or "")
        return project

    def years(self) -> list:
        return unique_years(self.projects)

    def technologies(self) -> list[str]:
        return unique_technologies(self.projects)

    def types(self) -> list[str]:
        return unique_types(self.projects)
