"""Job-title taxonomy: equivalence groups, role hierarchy, domain and technology maps.

The tables are read-only configuration. `load_taxonomy()` builds a frozen
`TitleTaxonomy` either from the built-in tables below or from a JSON file
with the same top-level keys:

    {"equivalents": {...}, "hierarchy": {...}, "domains": {...},
     "tech_roles": {...}, "seniority_levels": {...}}

The registry loads it once at startup and hands it to TitleExpander.
"""

import json
import logging
import re
from pathlib import Path

from pydantic import BaseModel, model_validator

logger = logging.getLogger(__name__)


class TaxonomyError(ValueError):
    """Raised when a taxonomy file cannot be loaded."""


def normalize_title(title: str) -> str:
    """Lower-case, strip and collapse inner whitespace."""
    return re.sub(r"\s+", " ", title.strip().lower())


# ---------------------------------------------------------------------------
# Built-in tables
# ---------------------------------------------------------------------------

# Titles that should be considered the same role (canonical -> equivalents)
EQUIVALENT_TITLES: dict[str, tuple[str, ...]] = {
    # Software engineering
    "Software Engineer": (
        "Software Developer", "Application Developer", "Programmer", "SDE",
        "Computer Programmer", "Coder",
    ),
    "Frontend Developer": (
        "Frontend Engineer", "UI Developer", "UI Engineer", "Web Developer",
        "Client-Side Developer",
    ),
    "Backend Developer": ("Backend Engineer", "Server-Side Developer", "API Developer"),
    "Full Stack Developer": (
        "Full Stack Engineer", "Web Application Developer", "End-to-End Developer",
    ),
    "DevOps Engineer": (
        "Site Reliability Engineer", "Platform Engineer", "Release Engineer",
        "Infrastructure Engineer",
    ),
    "QA Engineer": (
        "Quality Assurance Engineer", "Test Engineer", "Software Tester",
        "Automation Engineer",
    ),
    "Data Scientist": ("Machine Learning Engineer", "AI Developer", "ML Engineer"),
    "Data Engineer": ("Big Data Engineer", "ETL Developer", "Database Developer"),
    # Business / systems analysis
    "Business Analyst": (
        "Business Systems Analyst", "Requirements Analyst", "Process Analyst",
        "Business Process Analyst",
    ),
    "Systems Analyst": ("System Engineer", "IT Analyst", "Technical Analyst"),
    # Management
    "Project Manager": (
        "Program Manager", "IT Project Manager", "Technical Project Manager",
        "Delivery Manager",
    ),
    "Product Manager": ("Product Owner", "Technical Product Manager"),
    "Engineering Manager": (
        "Development Manager", "Software Development Manager",
        "Manager of Software Engineering",
    ),
    "CTO": ("Chief Technology Officer", "VP of Engineering", "Technical Director"),
}

# Specific title -> broader roles it rolls up into
TITLE_HIERARCHY: dict[str, tuple[str, ...]] = {
    # Technology specialists
    "Java Developer": ("Backend Developer", "Software Engineer"),
    "React Developer": ("Frontend Developer", "Software Engineer"),
    "Angular Developer": ("Frontend Developer", "Software Engineer"),
    "Vue Developer": ("Frontend Developer", "Software Engineer"),
    "Node.js Developer": ("Backend Developer", "Software Engineer"),
    "Python Developer": ("Backend Developer", "Software Engineer"),
    "iOS Developer": ("Mobile Developer", "Software Engineer"),
    "Android Developer": ("Mobile Developer", "Software Engineer"),
    "AWS Engineer": ("Cloud Engineer", "DevOps Engineer"),
    "Azure Engineer": ("Cloud Engineer", "DevOps Engineer"),
    "Database Administrator": ("Data Engineer",),
    # Seniority
    "Senior Software Engineer": ("Software Engineer",),
    "Lead Software Engineer": ("Senior Software Engineer",),
    "Principal Engineer": ("Lead Software Engineer",),
    "Software Architect": ("Principal Engineer",),
    "Senior Frontend Developer": ("Frontend Developer",),
    "Lead Frontend Developer": ("Senior Frontend Developer",),
    "Senior Backend Developer": ("Backend Developer",),
    "Lead Backend Developer": ("Senior Backend Developer",),
}

# Industry-specific titles -> generic roles
DOMAIN_TITLES: dict[str, dict[str, tuple[str, ...]]] = {
    "Finance": {
        "Financial Software Engineer": ("Software Engineer",),
        "Trading Systems Developer": ("Software Engineer",),
        "Financial Systems Analyst": ("Business Analyst", "Systems Analyst"),
        "Regulatory Technology Developer": ("Software Engineer",),
    },
    "Healthcare": {
        "Healthcare Software Engineer": ("Software Engineer",),
        "Clinical Systems Developer": ("Software Engineer",),
        "Healthcare Data Analyst": ("Data Analyst",),
        "Medical Systems Integrator": ("Integration Specialist", "Software Engineer"),
    },
    "E-commerce": {
        "E-commerce Developer": ("Full Stack Developer", "Software Engineer"),
        "Payments Integration Engineer": ("Software Engineer", "Backend Developer"),
        "Shopping Platform Engineer": ("Software Engineer",),
    },
    "Marketing": {
        "Marketing Automation Developer": ("Software Engineer",),
        "Digital Marketing Engineer": ("Software Engineer",),
        "MarTech Developer": ("Software Engineer",),
    },
}

# Technology keyword (substring match) -> roles it implies
TECH_TO_ROLES: dict[str, tuple[str, ...]] = {
    "React": ("Frontend Developer", "UI Developer", "Web Developer"),
    "Angular": ("Frontend Developer", "UI Developer", "Web Developer"),
    "Vue": ("Frontend Developer", "UI Developer", "Web Developer"),
    "JavaScript": ("Frontend Developer", "Full Stack Developer", "Web Developer"),
    "TypeScript": ("Frontend Developer", "Full Stack Developer", "Backend Developer"),
    "Node.js": ("Backend Developer", "Full Stack Developer"),
    "Express": ("Backend Developer", "Node.js Developer"),
    "Java": ("Backend Developer", "Software Engineer"),
    "Spring": ("Java Developer", "Backend Developer"),
    "Python": ("Backend Developer", "Data Engineer", "Data Scientist"),
    "Django": ("Python Developer", "Backend Developer"),
    "Flask": ("Python Developer", "Backend Developer"),
    "PHP": ("Backend Developer", "Web Developer"),
    "Laravel": ("PHP Developer", "Backend Developer"),
    "C#": ("Backend Developer", "Software Engineer", ".NET Developer"),
    ".NET": ("C# Developer", "Backend Developer"),
    "SQL": ("Database Developer", "Backend Developer", "Data Engineer"),
    "MongoDB": ("NoSQL Developer", "Database Developer"),
    "AWS": ("Cloud Engineer", "DevOps Engineer"),
    "Azure": ("Cloud Engineer", "DevOps Engineer"),
    "GCP": ("Cloud Engineer", "DevOps Engineer"),
    "Docker": ("DevOps Engineer", "Cloud Engineer"),
    "Kubernetes": ("DevOps Engineer", "Cloud Engineer"),
    "TensorFlow": ("Machine Learning Engineer", "Data Scientist"),
    "PyTorch": ("Machine Learning Engineer", "Data Scientist"),
    "Hadoop": ("Big Data Engineer", "Data Engineer"),
    "Spark": ("Data Engineer", "Big Data Engineer"),
}

# Seniority keyword -> weight (checked in this order)
SENIORITY_LEVELS: dict[str, float] = {
    "Junior": 0.7,
    "Associate": 0.8,
    "Mid-level": 0.9,
    "Senior": 1.0,
    "Lead": 1.1,
    "Principal": 1.2,
    "Staff": 1.1,
    "Architect": 1.2,
    "Manager": 1.0,
    "Director": 1.1,
}
DEFAULT_SENIORITY = ("Mid-level", 0.9)


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


class TitleTaxonomy(BaseModel):
    """Immutable bundle of the title tables."""

    model_config = {"frozen": True}

    equivalents: dict[str, tuple[str, ...]] = {}
    hierarchy: dict[str, tuple[str, ...]] = {}
    domains: dict[str, dict[str, tuple[str, ...]]] = {}
    tech_roles: dict[str, tuple[str, ...]] = {}
    seniority_levels: dict[str, float] = {}

    @model_validator(mode="after")
    def _check_hierarchy_acyclic(self) -> "TitleTaxonomy":
        edges = {
            normalize_title(child): [normalize_title(p) for p in parents]
            for child, parents in self.hierarchy.items()
        }
        done: set[str] = set()
        for start in edges:
            if start in done:
                continue
            path: set[str] = set()
            stack = [(start, iter(edges.get(start, [])))]
            path.add(start)
            while stack:
                node, children = stack[-1]
                child = next(children, None)
                if child is None:
                    stack.pop()
                    path.discard(node)
                    done.add(node)
                    continue
                if child in path:
                    raise ValueError(f"Title hierarchy has a cycle through {child!r}")
                if child not in done:
                    path.add(child)
                    stack.append((child, iter(edges.get(child, []))))
        return self

    @property
    def size(self) -> int:
        """Number of distinct titles named anywhere in the equivalence and hierarchy tables."""
        titles = set()
        for canonical, members in self.equivalents.items():
            titles.add(normalize_title(canonical))
            titles.update(normalize_title(m) for m in members)
        for child, parents in self.hierarchy.items():
            titles.add(normalize_title(child))
            titles.update(normalize_title(p) for p in parents)
        return len(titles)


def default_taxonomy() -> TitleTaxonomy:
    return TitleTaxonomy(
        equivalents=EQUIVALENT_TITLES,
        hierarchy=TITLE_HIERARCHY,
        domains=DOMAIN_TITLES,
        tech_roles=TECH_TO_ROLES,
        seniority_levels=SENIORITY_LEVELS,
    )


def load_taxonomy(path: str | Path | None = None) -> TitleTaxonomy:
    """Load the taxonomy from a JSON file, or the built-in tables when no path is set.

    Tables missing from the file fall back to the built-in ones.
    """
    if not path:
        taxonomy = default_taxonomy()
        logger.info("Using built-in title taxonomy (%d titles)", taxonomy.size)
        return taxonomy

    filepath = Path(path)
    if not filepath.exists():
        raise TaxonomyError(f"Taxonomy file not found: {filepath}")

    try:
        with filepath.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except json.JSONDecodeError as e:
        raise TaxonomyError(f"Invalid taxonomy JSON in {filepath}: {e}") from e

    if not isinstance(raw, dict):
        raise TaxonomyError(f"Taxonomy file {filepath} must contain a JSON object")

    try:
        taxonomy = TitleTaxonomy(
            equivalents=raw.get("equivalents", EQUIVALENT_TITLES),
            hierarchy=raw.get("hierarchy", TITLE_HIERARCHY),
            domains=raw.get("domains", DOMAIN_TITLES),
            tech_roles=raw.get("tech_roles", TECH_TO_ROLES),
            seniority_levels=raw.get("seniority_levels", SENIORITY_LEVELS),
        )
    except ValueError as e:
        raise TaxonomyError(f"Invalid taxonomy in {filepath}: {e}") from e

    logger.info("Loaded title taxonomy with %d titles from %s", taxonomy.size, filepath)
    return taxonomy
