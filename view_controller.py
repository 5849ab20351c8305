"""
View controllers for the list page and the project detail page.

HomeView is the only place mutable UI state lives (current control values,
per-card visibility, count label). The store, filters and templates it drives
stay pure.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, Union

import requests

from filters import FilterCriteria, FilterResult, apply_filters, format_count
from project_store import (
    LoadError,
    NotFoundError,
    Project,
    ProjectStore,
    SiteConfig,
)
from templates import (
    render_cards,
    render_detail,
    render_load_error,
    render_loading,
    render_not_found,
)

log = logging.getLogger("portfolio.view")

FILTER_INPUTS = ("year", "tech", "type", "search")


class ViewState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
    NOT_FOUND = "not_found"


Listener = Callable[["HomeView", FilterResult], None]


class HomeView:
    """Project list with year/tech/type/search filtering."""

    def __init__(self, store: Optional[ProjectStore] = None, base_path: str = ""):
        self.store = store
        self.base_path = base_path
        self.state = ViewState.LOADING if store is None else ViewState.READY
        self.error = ""
        self.inputs = {name: "" for name in FILTER_INPUTS}
        self.years: list = []
        self.technologies: list[str] = []
        self.types: list[str] = []
        self.visibility: dict[str, bool] = {}
        self.visible_count = 0
        self.count_label = ""
        self._listeners: list[Listener] = []

        if store is not None:
            self._initialise()

    @classmethod
    def open(cls, source: Union[str, Path], session: Optional[requests.Session] = None,
             base_path: str = "") -> "HomeView":
        """Load the store once; a LoadError becomes the error state."""
        view = cls(base_path=base_path)
        try:
            view.store = ProjectStore.load(source, session=session)
        except LoadError as e:
            view.state = ViewState.ERROR
            view.error = str(e)
            return view
        view.state = ViewState.READY
        view._initialise()
        return view

    def _initialise(self):
        self.years = self.store.years()
        self.technologies = self.store.technologies()
        self.types = self.store.types()
        if not self.store.projects:
            log.warning("No projects found in data")
        self._recompute()

    # -- state ------------------------------------------------------------

    @property
    def config(self) -> SiteConfig:
        return self.store.config if self.store else SiteConfig()

    @property
    def total(self) -> int:
        return len(self.store) if self.store else 0

    @property
    def criteria(self) -> FilterCriteria:
        return FilterCriteria.from_inputs(self.inputs)

    def visible_projects(self) -> list[Project]:
        if not self.store:
            return []
        return [p for p in self.store.projects if self.visibility.get(p.id)]

    # -- criteria changed -------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **inputs: Any) -> Optional[FilterResult]:
        """Apply changed control values and notify subscribers."""
        unknown = set(inputs) - set(FILTER_INPUTS)
        if unknown:
            raise TypeError(f"Unknown filter inputs: {', '.join(sorted(unknown))}")
        self.inputs.update(inputs)
        if self.state is not ViewState.READY:
            return None

        result = self._recompute()
        for listener in list(self._listeners):
            listener(self, result)
        return result

    def reset(self) -> Optional[FilterResult]:
        return self.update(**{name: "" for name in FILTER_INPUTS})

    def _recompute(self) -> FilterResult:
        result = apply_filters(self.store.projects, self.criteria)
        visible = set(result.visible_ids)
        self.visibility = {p.id: p.id in visible for p in self.store.projects}
        self.visible_count = result.visible_count
        self.count_label = format_count(result.visible_count, self.total)
        log.debug(f"Filter {self.criteria} -> {self.count_label}")
        return result

    # -- rendering --------------------------------------------------------

    def render(self) -> str:
        if self.state is ViewState.LOADING:
            return render_loading()
        if self.state is ViewState.ERROR:
            return render_load_error(self.error)
        return render_cards(self.store.projects, self.base_path)


# ---------------------------------------------------------------------------
# Detail page
# ---------------------------------------------------------------------------

def project_id_from_path(path: str) -> Optional[str]:
    """Segment following a literal 'projects' segment, if any."""
    parts = [p for p in path.split("?")[0].split("#")[0].split("/") if p]
    try:
        index = parts.index("projects")
    except ValueError:
        return None
    return parts[index + 1] if index + 1 < len(parts) else None


class DetailView:
    """Single project page, routed by URL path."""

    def __init__(self, state: ViewState, project: Optional[Project] = None,
                 config: Optional[SiteConfig] = None, error: str = ""):
        self.state = state
        self.project = project
        self.config = config or SiteConfig()
        self.error = error

    @classmethod
    def for_store(cls, store: ProjectStore, path: str) -> "DetailView":
        try:
            project = store.get(project_id_from_path(path))
        except NotFoundError as e:
            log.info(str(e))
            return cls(ViewState.NOT_FOUND, config=store.config)
        return cls(ViewState.READY, project=project, config=store.config)

    @classmethod
    def open(cls, source: Union[str, Path], path: str,
             session: Optional[requests.Session] = None) -> "DetailView":
        if project_id_from_path(path) is None:
            return cls(ViewState.NOT_FOUND)
        try:
            store = ProjectStore.load(source, session=session)
        except LoadError as e:
            return cls(ViewState.ERROR, error=str(e))
        return cls.for_store(store, path)

    @property
    def title(self) -> str:
        if self.project is None:
            return f"Project not found — {self.config.site_name}" if self.config.site_name else "Project not found"
        if not self.config.site_name:
            return self.project.title
        return f"{self.project.title} — {self.config.site_name}"

    @property
    def og_title(self) -> str:
        return f"[WebApp] {self.project.title}" if self.project else self.title

    def render(self) -> str:
        if self.state is ViewState.READY:
            return render_detail(self.project)
        if self.state is ViewState.ERROR:
            return render_load_error(self.error)
        return render_not_found()
