import json

import pytest

from project_store import ProjectStore, parse_portfolio


@pytest.fixture
def scenario_payload():
    """The two-project document used throughout the filter tests."""
    return {
        "config": {"siteName": "Test Site", "tagline": "Things I built"},
        "projects": [
            {"id": "a", "year": 2023, "type": "web", "tech": ["react"],
             "title": "Alpha", "description": "x"},
            {"id": "b", "year": 2022, "type": "cli", "tech": ["go"],
             "title": "Beta", "description": "y"},
        ],
    }


@pytest.fixture
def full_payload():
    return {
        "config": {"siteName": "Jane Dev", "tagline": "Builder of things"},
        "projects": [
            {
                "id": "weather",
                "title": "Weather Dashboard",
                "description": "Charts & forecasts",
                "icon": "W",
                "url": "/projects/weather/",
                "year": 2024,
                "type": "Web App",
                "tech": ["React", "TypeScript", "React"],
                "details": {
                    "summary": "Forecasts for any city",
                    "content": "Uses a public API.",
                    "images": ["https://img.example/1.png", "https://img.example/2.png"],
                    "links": {"github": "https://github.com/jane/weather",
                              "demo": "https://jane.dev/weather"},
                    "diagram": {"type": "mermaid", "code": "graph LR\n  A --> B"},
                    "giscus": {"repo": "jane/weather", "repoId": "R_1",
                               "category": "General", "categoryId": "C_1"},
                },
            },
            {
                "id": "pipeline",
                "title": "Log Pipeline",
                "description": "Streaming ingestion",
                "icon": "P",
                "year": 2023,
                "type": "Data",
                "tech": ["Python", "Apache Kafka"],
                "details": {"summary": "Kafka to Delta", "content": "Lands logs as tables."},
            },
            {
                "id": "todo",
                "title": "Todo CLI",
                "description": "Tasks from the terminal",
                "year": "2023",
                "type": "CLI",
                "tech": ["Node.js", "Python"],
            },
        ],
    }


@pytest.fixture
def scenario_data(scenario_payload):
    return parse_portfolio(scenario_payload)


@pytest.fixture
def full_data(full_payload):
    return parse_portfolio(full_payload)


@pytest.fixture
def full_store(full_data):
    return ProjectStore(full_data)


@pytest.fixture
def data_file(tmp_path, full_payload):
    path = tmp_path / "projects.json"
    path.write_text(json.dumps(full_payload), encoding="utf-8")
    return path
