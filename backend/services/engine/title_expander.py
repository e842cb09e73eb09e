"""Title expansion over the job-title taxonomy.

expand("Java Developer") ->
    Java Developer
    + equivalence group of the title (none here)
    + parent roles: Backend Developer, Software Engineer
    + each parent's equivalence group (Backend Engineer, Software Developer, ...)
    + domain-specific generic roles, treated like parents

Parents are not followed transitively: only the declared parent list of the
title itself is used.
"""

import logging

from services.engine.taxonomy import DEFAULT_SENIORITY, TitleTaxonomy, normalize_title

logger = logging.getLogger(__name__)

_DEV_TERMS = ("developer", "engineer", "programmer", "architect")


class _TitleSet:
    """Insertion-ordered set of titles, deduplicated case-insensitively."""

    def __init__(self) -> None:
        self._titles: dict[str, str] = {}

    def add(self, title: str) -> None:
        self._titles.setdefault(normalize_title(title), title)

    def update(self, titles) -> None:
        for t in titles:
            self.add(t)

    def to_list(self) -> list[str]:
        return list(self._titles.values())


class TitleExpander:
    """Pure title-expansion functions bound to one taxonomy."""

    def __init__(self, taxonomy: TitleTaxonomy) -> None:
        self.taxonomy = taxonomy

        # normalized title -> equivalence groups it belongs to (canonical first)
        self._groups: dict[str, list[tuple[str, ...]]] = {}
        for canonical, members in taxonomy.equivalents.items():
            group = (canonical, *members)
            for t in group:
                self._groups.setdefault(normalize_title(t), []).append(group)

        self._parents: dict[str, tuple[str, ...]] = {
            normalize_title(child): parents
            for child, parents in taxonomy.hierarchy.items()
        }

        self._domains: dict[str, dict[str, tuple[str, ...]]] = {
            normalize_title(domain): {
                normalize_title(title): roles for title, roles in table.items()
            }
            for domain, table in taxonomy.domains.items()
        }

        self._tech_keys = [
            (tech.lower(), tech, roles) for tech, roles in taxonomy.tech_roles.items()
        ]

    # -- lookups -----------------------------------------------------------

    def equivalents(self, title: str) -> list[str]:
        """Equivalence closure of a title; unknown titles map to themselves."""
        groups = self._groups.get(normalize_title(title))
        if not groups:
            return [title]
        result = _TitleSet()
        for group in groups:
            result.update(group)
        return result.to_list()

    def parent_roles(self, title: str) -> list[str]:
        return list(self._parents.get(normalize_title(title), ()))

    def domain_roles(self, title: str, domain: str | None = None) -> list[str]:
        """Generic roles for a domain-specific title.

        With no domain given every domain table is consulted.
        """
        key = normalize_title(title)
        if domain:
            tables = [self._domains.get(normalize_title(domain), {})]
        else:
            tables = list(self._domains.values())
        result = _TitleSet()
        for table in tables:
            result.update(table.get(key, ()))
        return result.to_list()

    # -- expansion ---------------------------------------------------------

    def expand(self, title: str, domain: str | None = None) -> list[str]:
        """All titles a holder of `title` could be considered for.

        Deterministic, deduplicated case-insensitively, `title` always first.
        """
        result = _TitleSet()
        result.add(title)
        result.update(self.equivalents(title))

        for parent in self.parent_roles(title) + self.domain_roles(title, domain):
            result.add(parent)
            result.update(self.equivalents(parent))

        return result.to_list()

    def roles_from_skills(self, skills: list[str] | tuple[str, ...]) -> list[str]:
        """Roles implied by technology skills (substring match on the tech key)."""
        result = _TitleSet()
        for skill in skills:
            skill_lower = skill.lower().strip()
            if not skill_lower:
                continue
            for key, _, roles in self._tech_keys:
                if key in skill_lower:
                    result.update(roles)
        return result.to_list()

    # -- title analysis ----------------------------------------------------

    def technologies_in_title(self, title: str) -> list[str]:
        title_lower = title.lower()
        return [tech for key, tech, _ in self._tech_keys if key in title_lower]

    def are_equivalent(self, title_a: str, title_b: str) -> bool:
        """Same title, same equivalence group, or developer roles on a shared technology."""
        norm_a = normalize_title(title_a)
        norm_b = normalize_title(title_b)
        if norm_a == norm_b:
            return True

        groups_a = self._groups.get(norm_a, [])
        if any(group in groups_a for group in self._groups.get(norm_b, [])):
            return True

        shared = set(self.technologies_in_title(title_a)) & set(self.technologies_in_title(title_b))
        if shared:
            return any(t in norm_a for t in _DEV_TERMS) and any(t in norm_b for t in _DEV_TERMS)
        return False

    def seniority(self, title: str) -> tuple[str, float]:
        """Seniority level named in the title, defaulting to mid-level."""
        title_lower = title.lower()
        for level, weight in self.taxonomy.seniority_levels.items():
            if level.lower() in title_lower:
                return level, weight
        return DEFAULT_SENIORITY
