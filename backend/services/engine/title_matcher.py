"""Title matching: score a candidate's title history against a job title.

Scoring tiers:
    exact     1.0   candidate held the job title or one of its equivalents
    expanded  <=cap best lexical match between expanded title sets
    lexical   raw job title vs raw candidate title, no expansion involved

Lexical similarity of two titles:
    identical            1.0
    substring            0.9
    otherwise            0.8 * common_words / max(word counts)
"""

import logging

from models.schemas.title_match import TitleMatchResult
from services.engine.taxonomy import normalize_title
from services.engine.title_expander import TitleExpander

logger = logging.getLogger(__name__)

DEFAULT_EXPANDED_CEILING = 0.9


def title_similarity(title_a: str, title_b: str) -> float:
    """Lexical similarity between two titles, 0.0-1.0."""
    s1 = normalize_title(title_a)
    s2 = normalize_title(title_b)
    if not s1 or not s2:
        return 0.0
    if s1 == s2:
        return 1.0
    if s1 in s2 or s2 in s1:
        return 0.9

    words1 = s1.split()
    words2 = s2.split()
    common = sum(1 for w in words1 if w in words2)
    return common / max(len(words1), len(words2)) * 0.8


class TitleMatcher:
    def __init__(
        self,
        expander: TitleExpander,
        expanded_ceiling: float = DEFAULT_EXPANDED_CEILING,
    ) -> None:
        self.expander = expander
        self.expanded_ceiling = expanded_ceiling

    def score(
        self,
        job_title: str,
        candidate_titles: list[str],
        job_skills: list[str] | None = None,
        candidate_skills: list[str] | None = None,
        domain: str | None = None,
    ) -> TitleMatchResult:
        titles = [t for t in (candidate_titles or []) if t and t.strip()]
        if not titles or not job_title or not job_title.strip():
            return TitleMatchResult()

        # Exact matches win regardless of order in the history
        job_closure = {normalize_title(t) for t in self.expander.equivalents(job_title)}
        job_closure.add(normalize_title(job_title))
        for candidate_title in titles:
            if normalize_title(candidate_title) in job_closure:
                return self._result(job_title, candidate_title, 1.0, "exact")

        expanded_job = self.expander.expand(job_title, domain) + self.expander.roles_from_skills(
            job_skills or []
        )
        candidate_skill_roles = self.expander.roles_from_skills(candidate_skills or [])
        job_norm = normalize_title(job_title)

        best_score = 0.0
        best_title: str | None = None
        best_type = "none"

        for candidate_title in titles:
            cand_norm = normalize_title(candidate_title)
            expanded_candidate = self.expander.expand(candidate_title, domain) + candidate_skill_roles

            for job_variant in expanded_job:
                raw_job = normalize_title(job_variant) == job_norm
                for cand_variant in expanded_candidate:
                    sim = title_similarity(job_variant, cand_variant)
                    if sim <= best_score:
                        continue
                    if raw_job and normalize_title(cand_variant) == cand_norm:
                        score, match_type = sim, "lexical"
                    else:
                        score, match_type = min(sim, self.expanded_ceiling), "expanded"
                    if score > best_score:
                        best_score = score
                        best_title = candidate_title
                        best_type = match_type

        if best_title is None:
            return TitleMatchResult()

        logger.debug(
            "Title match %r -> %r: %.2f (%s)", job_title, best_title, best_score, best_type
        )
        return self._result(job_title, best_title, best_score, best_type)

    def _result(
        self, job_title: str, matched_title: str, score: float, match_type: str
    ) -> TitleMatchResult:
        shared = [
            t for t in self.expander.technologies_in_title(job_title)
            if t in self.expander.technologies_in_title(matched_title)
        ]
        return TitleMatchResult(
            score=round(max(0.0, min(1.0, score)), 4),
            matched_title=matched_title,
            match_type=match_type,
            technologies=shared,
            job_seniority=self.expander.seniority(job_title)[0],
            candidate_seniority=self.expander.seniority(matched_title)[0],
        )
