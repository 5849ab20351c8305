"""shields.io badge tags for technologies, years and project types."""

import html
import re
from urllib.parse import quote

BADGE_BASE = "https://img.shields.io/badge"
YEAR_COLOR = "2563EB"
TYPE_COLOR = "10B981"
DEFAULT_TECH_COLOR = "0D1117"

TECH_COLOR_MAP = {
    "html5": "E34F26", "html": "E34F26",
    "javascript": "f7df1c", "js": "f7df1c",
    "bootstrap": "7953b3",
    "typescript": "007ACC", "ts": "007ACC",
    "react": "45b8d8", "reactjs": "45b8d8",
    "angular": "DD0031",
    "jest": "be3d19",
    "adobephotoshop": "30a8ff", "photoshop": "30a8ff",
    "adobexd": "ff62f6", "xd": "ff62f6",
    "nodejs": "43853d", "node.js": "43853d", "node": "43853d",
    "webpack": "8DD6F9",
    "docker": "46a2f1",
    "githubactions": "2088FF", "github-actions": "2088FF",
    "googlecloudplatform": "1a73e8", "gcp": "1a73e8",
    "insomnia": "5849BE",
    "apollo": "311C87", "apollographql": "311C87",
    "redux": "764ABC",
    "graphql": "E10098",
    "sass": "CC6699", "scss": "CC6699",
    "styledcomponents": "db7092", "styled-components": "db7092",
    "git": "F05032",
    "nestjs": "ea2845", "nest": "ea2845",
    "npm": "CB3837",
    "d3js": "F9A03C", "d3.js": "F9A03C", "d3": "F9A03C",
    "prettier": "F7B93E",
    "mongodb": "13aa52", "mongo": "13aa52",
    "vite": "646CFF",
    "pwa": "5A0FC8",
    "scala": "DC322F",
    "apachespark": "E25A1C", "spark": "E25A1C", "apachesparks": "E25A1C",
    "databricks": "FF3621",
    "deltalake": "00ADD4", "delta": "00ADD4",
    "apachekafka": "231F20", "kafka": "231F20",
    "python": "3776AB",
    "java": "007396",
    "spring": "6DB33F", "springboot": "6DB33F",
    "postgresql": "4169E1", "postgres": "4169E1",
    "mysql": "4479A1",
    "aws": "FF9900", "amazon": "FF9900",
    "azure": "0089D6",
    "kubernetes": "326CE5", "k8s": "326CE5",
    "terraform": "7B42BC",
    "jenkins": "D24939",
    "gitlab": "FCA121",
    "pandas": "150458",
    "airflow": "017CEE", "apacheairflow": "017CEE",
}

# Same characters encodeURIComponent leaves alone
_URI_SAFE = "-_.!~*'()"


def _component(value) -> str:
    return quote(str(value), safe=_URI_SAFE)


def normalise_tech(tech: str) -> str:
    return re.sub(r"\s+", "", tech.lower())


def tech_color(tech: str) -> str:
    return TECH_COLOR_MAP.get(normalise_tech(tech), DEFAULT_TECH_COLOR)


def tech_logo_color(tech: str) -> str:
    return "black" if normalise_tech(tech) in ("javascript", "js") else "white"


def tech_badge(tech: str, small: bool = False) -> str:
    css_class = "tech-badge-small" if small else "tech-badge-img"
    src = (f"{BADGE_BASE}/-{_component(tech)}-{tech_color(tech)}"
           f"?style=flat-square&logo={_component(normalise_tech(tech))}"
           f"&logoColor={tech_logo_color(tech)}")
    return f'<img src="{html.escape(src)}" alt="{html.escape(tech)}" class="{css_class}" />'


def tech_badges(techs, small: bool = False) -> str:
    return "".join(tech_badge(t, small) for t in techs)


def year_badge(year) -> str:
    src = f"{BADGE_BASE}/{_component(year)}-{YEAR_COLOR}?style=flat-square"
    return f'<img src="{html.escape(src)}" alt="{html.escape(str(year))}" class="card-badge" />'


def type_badge(project_type: str) -> str:
    src = f"{BADGE_BASE}/{_component(project_type)}-{TYPE_COLOR}?style=flat-square"
    return f'<img src="{html.escape(src)}" alt="{html.escape(project_type)}" class="card-badge" />'


def year_badge_detail(year) -> str:
    src = f"{BADGE_BASE}/Year-{_component(year)}-{YEAR_COLOR}?style=flat-square&logoColor=white"
    return f'<img src="{html.escape(src)}" alt="Year: {html.escape(str(year))}" class="badge-img" />'


def type_badge_detail(project_type: str) -> str:
    src = f"{BADGE_BASE}/Type-{_component(project_type)}-{TYPE_COLOR}?style=flat-square&logoColor=white"
    return f'<img src="{html.escape(src)}" alt="Type: {html.escape(project_type)}" class="badge-img" />'
