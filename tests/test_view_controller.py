"""Tests for the list/detail view controllers."""
from unittest.mock import MagicMock

import pytest
import requests

from project_store import PortfolioData, ProjectStore, SiteConfig
from view_controller import DetailView, HomeView, ViewState, project_id_from_path


@pytest.fixture
def home(full_store):
    return HomeView(full_store)


class TestHomeView:

    def test_initial_state_shows_everything(self, home):
        assert home.state is ViewState.READY
        assert all(home.visibility.values())
        assert home.count_label == "(3 of 3)"
        assert home.visible_count == 3

    def test_option_sets(self, home):
        assert home.types == ["CLI", "Data", "Web App"]
        assert home.technologies[0] == "Apache Kafka"
        assert home.years[0] == 2024

    def test_update_filters_and_counts(self, home):
        result = home.update(tech="Python")
        assert list(result.visible_ids) == ["pipeline", "todo"]
        assert home.visibility == {"weather": False, "pipeline": True, "todo": True}
        assert home.count_label == "(2 of 3)"
        assert [p.id for p in home.visible_projects()] == ["pipeline", "todo"]

    def test_updates_accumulate_until_reset(self, home):
        home.update(tech="Python")
        home.update(search="todo")
        assert home.count_label == "(1 of 3)"
        home.reset()
        assert home.count_label == "(3 of 3)"

    def test_subscribers_are_notified_once_per_change(self, home):
        seen = []
        unsubscribe = home.subscribe(lambda view, result: seen.append(result.visible_count))
        home.update(year="2024")
        home.update(year="")
        unsubscribe()
        home.update(year="2023")
        assert seen == [1, 3]

    def test_unknown_input_rejected(self, home):
        with pytest.raises(TypeError):
            home.update(colour="red")

    def test_render_lists_all_cards(self, home):
        html = home.render()
        assert html.count('<article class="card"') == 3

    def test_open_from_file(self, data_file):
        view = HomeView.open(data_file)
        assert view.state is ViewState.READY
        assert view.total == 3
        assert view.config.site_name == "Jane Dev"

    def test_open_load_error_becomes_error_state(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("network down")

        view = HomeView.open("https://example.com/projects.json", session=session)

        assert view.state is ViewState.ERROR
        assert "network down" in view.error
        assert "network down" in view.render()
        assert view.update(year="2024") is None
        assert view.visible_projects() == []

    def test_empty_store(self):
        view = HomeView(ProjectStore(PortfolioData(config=SiteConfig(), projects=())))
        assert view.count_label == "(0 of 0)"


@pytest.mark.parametrize("path, expected", [
    ("/projects/weather/", "weather"),
    ("/my-portfolio/projects/weather", "weather"),
    ("/projects/weather/?ref=home", "weather"),
    ("/projects/", None),
    ("/about/", None),
    ("", None),
])
def test_project_id_from_path(path, expected):
    assert project_id_from_path(path) == expected


class TestDetailView:

    def test_found(self, full_store):
        view = DetailView.for_store(full_store, "/projects/weather/")
        assert view.state is ViewState.READY
        assert view.title == "Weather Dashboard — Jane Dev"
        assert view.og_title == "[WebApp] Weather Dashboard"
        assert "project-hero" in view.render()

    def test_unknown_id_renders_not_found(self, full_store):
        view = DetailView.for_store(full_store, "/projects/missing/")
        assert view.state is ViewState.NOT_FOUND
        assert view.project is None
        assert "PROJECT VANISHED" in view.render()

    def test_open_without_id_segment_skips_fetch(self):
        session = MagicMock()
        view = DetailView.open("https://example.com/projects.json", "/about/", session=session)
        assert view.state is ViewState.NOT_FOUND
        session.get.assert_not_called()

    def test_open_load_error(self):
        session = MagicMock()
        session.get.side_effect = requests.Timeout("timed out")
        view = DetailView.open("https://example.com/projects.json", "/projects/weather/", session=session)
        assert view.state is ViewState.ERROR
        assert "timed out" in view.render()

    def test_open_from_file(self, data_file):
        view = DetailView.open(data_file, "/projects/todo/")
        assert view.state is ViewState.READY
        assert view.project.title == "Todo CLI"
        assert "project-link-btn" not in view.render()
