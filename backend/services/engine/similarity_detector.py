"""Cross-candidate similarity detector: find other candidates sharing a job history.

Each employment record becomes a chronology tuple:

    (company before the first comma, lower-cased;
     alphanumeric tokens of the period, lower-cased)

so "FIS, Irving, TX / July 2020 – Aug 2022" and "fis / july 2020 - aug 2022"
compare equal. The similarity between the checked candidate (A) and another
candidate (B) is the share of A's tuples also found in B, 0-100, regardless of
order. Identical tuple sets are identical chronology; anything at or above the
high-similarity threshold is high similarity.

The pool is read, never modified. The scan is O(n * m) over the pool.
"""

import logging
import re

from models.schemas.candidate import Candidate
from models.schemas.employment import UNKNOWN_COMPANY, UNKNOWN_PERIOD, EmploymentRecord, ResumeProfile
from models.schemas.similarity import CandidateSimilarityMatch, SimilarityReport, SuspiciousPattern
from models.schemas.validation import Severity

logger = logging.getLogger(__name__)

DEFAULT_HIGH_SIMILARITY_THRESHOLD = 80

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

ChronologyTuple = tuple[str, tuple[str, ...]]


def normalize_company(company: str) -> str:
    return re.sub(r"\s+", " ", company.split(",")[0].strip().lower())


def period_tokens(period: str) -> tuple[str, ...]:
    """Punctuation-free token form of a date range ("Feb 2023- Present" -> ("feb", "2023", "present")).

    Token order is kept: "Jan 2020 - Mar 2021" and "Mar 2020 - Jan 2021" differ.
    """
    if period == UNKNOWN_PERIOD:
        return ()
    return tuple(t for t in _NON_ALNUM.split(period.lower()) if t)


def chronology(profile: ResumeProfile) -> dict[ChronologyTuple, EmploymentRecord]:
    """Chronology tuples of a profile, mapped to the first record producing each."""
    tuples: dict[ChronologyTuple, EmploymentRecord] = {}
    for record in profile.records:
        if record.company == UNKNOWN_COMPANY:
            continue
        company = normalize_company(record.company)
        if not company:
            continue
        tuples.setdefault((company, period_tokens(record.period)), record)
    return tuples


def similarity_score(
    source: dict[ChronologyTuple, EmploymentRecord],
    other: dict[ChronologyTuple, EmploymentRecord],
) -> int:
    if not source:
        return 0
    matched = sum(1 for t in source if t in other)
    return max(0, min(100, round(matched / len(source) * 100)))


class CrossCandidateSimilarityDetector:
    def __init__(self, high_similarity_threshold: int = DEFAULT_HIGH_SIMILARITY_THRESHOLD) -> None:
        self.high_similarity_threshold = high_similarity_threshold

    def find_similar(
        self,
        profile: ResumeProfile,
        pool: list[Candidate] | None,
        exclude_id: int | None = None,
    ) -> SimilarityReport:
        """Compare a profile against every other candidate in the pool.

        An empty or missing pool, or a profile without companies, yields an
        empty report.
        """
        source = chronology(profile)
        if not source or not pool:
            logger.info(
                "Similarity check skipped: %d chronology entries, pool size %d",
                len(source), len(pool or []),
            )
            return SimilarityReport()

        identical: list[CandidateSimilarityMatch] = []
        similar: list[CandidateSimilarityMatch] = []
        checked = 0

        for other in pool:
            if exclude_id is not None and other.id == exclude_id:
                continue
            other_tuples = chronology(other.profile)
            if not other_tuples:
                continue
            checked += 1

            score = similarity_score(source, other_tuples)
            if score == 0:
                continue

            is_identical = set(source) == set(other_tuples)
            if not is_identical and score < self.high_similarity_threshold:
                continue

            shared = [record for t, record in source.items() if t in other_tuples]
            match = CandidateSimilarityMatch(
                candidate_id=other.id,
                candidate_name=other.name or f"Unknown (ID: {other.id})",
                candidate_email=other.email or "Unknown",
                similarity_score=100 if is_identical else score,
                matched_companies=list(dict.fromkeys(r.company for r in shared)),
                matched_dates=list(dict.fromkeys(
                    r.period for r in shared if r.period != UNKNOWN_PERIOD
                )),
                severity=Severity.HIGH if is_identical else Severity.MEDIUM,
            )
            (identical if is_identical else similar).append(match)

        def _rank(m: CandidateSimilarityMatch) -> tuple[int, int]:
            return -m.similarity_score, m.candidate_id

        identical.sort(key=_rank)
        similar.sort(key=_rank)

        logger.info(
            "Similarity check over %d candidates: %d identical, %d high similarity",
            checked, len(identical), len(similar),
        )
        return SimilarityReport(
            identical_chronology_matches=identical,
            high_similarity_matches=similar,
            total_candidates_checked=checked,
            suspicious_patterns=self._patterns(identical, similar),
            message=self._message(identical, similar),
        )

    def find_similar_to_candidate(
        self, candidate: Candidate, pool: list[Candidate] | None
    ) -> SimilarityReport:
        return self.find_similar(candidate.profile, pool, exclude_id=candidate.id)

    def _patterns(
        self,
        identical: list[CandidateSimilarityMatch],
        similar: list[CandidateSimilarityMatch],
    ) -> list[SuspiciousPattern]:
        patterns: list[SuspiciousPattern] = []
        if identical:
            patterns.append(SuspiciousPattern(
                type="IDENTICAL_CHRONOLOGY",
                severity=Severity.HIGH,
                message=f"{len(identical)} other candidate(s) have identical employer sequence and dates",
                detail="Same companies with matching employment dates strongly suggests resume fraud. "
                       "Consider rejecting this candidate or requiring additional verification.",
            ))
        if similar:
            patterns.append(SuspiciousPattern(
                type="HIGH_SIMILARITY",
                severity=Severity.MEDIUM,
                message=f"{len(similar)} other candidate(s) have >={self.high_similarity_threshold}% "
                        "matching employment histories",
                detail="Extremely similar work histories may indicate resume fraud, template usage, "
                       "or legitimate similar career paths. Review carefully.",
            ))
        return patterns

    def _message(
        self,
        identical: list[CandidateSimilarityMatch],
        similar: list[CandidateSimilarityMatch],
    ) -> str:
        if identical:
            return (
                f"CRITICAL: Found {len(identical)} candidates with identical job chronology. "
                "This is a high fraud risk pattern."
            )
        if similar:
            return (
                f"WARNING: Found {len(similar)} candidates with >={self.high_similarity_threshold}% "
                "similar employment history. Review carefully."
            )
        return SimilarityReport().message
