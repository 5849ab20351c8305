"""Filter logic for the project list: year, tech, type and free-text search."""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, NamedTuple, Optional

from project_store import Project


def _criterion(value: Any) -> str:
    # Anything that is not text is no constraint
    return value if isinstance(value, str) else ""


def _year_criterion(value: Any) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return _criterion(value)


@dataclass(frozen=True)
class FilterCriteria:
    year: Optional[str] = None
    tech: Optional[str] = None
    type: Optional[str] = None
    search_query: Optional[str] = None

    @classmethod
    def from_inputs(cls, inputs: Mapping[str, Any]) -> "FilterCriteria":
        """Build criteria from raw control values (select/search input)."""
        search = inputs.get("search", inputs.get("searchQuery"))
        return cls(
            year=inputs.get("year"),
            tech=inputs.get("tech"),
            type=inputs.get("type"),
            search_query=search,
        )


class FilterResult(NamedTuple):
    visible_ids: tuple
    visible_count: int


def matches(project: Project, criteria: FilterCriteria) -> bool:
    """True if the project passes every active criterion."""
    year = _year_criterion(criteria.year)
    if year and str(project.year) != year:
        return False

    tech = _criterion(criteria.tech)
    if tech and tech not in project.tech:
        return False

    project_type = _criterion(criteria.type)
    if project_type and project.type != project_type:
        return False

    query = _criterion(criteria.search_query).lower().strip()
    if query:
        if query not in project.title.lower() and query not in project.description.lower():
            return False

    return True


def apply_filters(projects: Iterable[Project], criteria: FilterCriteria) -> FilterResult:
    """Visible project ids in load order, plus their count."""
    visible = tuple(p.id for p in projects if matches(p, criteria))
    return FilterResult(visible_ids=visible, visible_count=len(visible))


def format_count(visible_count: int, total_count: int) -> str:
    return f"({visible_count} of {total_count})"
