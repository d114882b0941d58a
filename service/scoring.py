"""
Preference scoring.

Each matching preference contributes ``value * importance``. Lookups are
tiered: class-specific preferences win over subject-level ones, which win
over professor-wide ones. A tier only takes over when at least one record
with non-zero importance matched it.
"""
from typing import Dict, Iterable, Tuple

from models.domain import Preference, SectionClass


class PreferenceScorer:
    """Immutable score lookup built from one preference set."""

    def __init__(self, preferences: Iterable[Preference]):
        self._by_class: Dict[Tuple[str, str], float] = {}
        self._by_subject: Dict[Tuple[str, str], float] = {}
        self._general: Dict[str, float] = {}

        for pref in preferences:
            # Zero importance contributes nothing and must not shadow a lower tier
            if pref.importance == 0:
                continue
            weighted = pref.value * pref.importance
            if pref.class_id is not None:
                key = (pref.professor_id, pref.class_id)
                self._by_class[key] = self._by_class.get(key, 0.0) + weighted
            elif pref.subject_id is not None:
                key = (pref.professor_id, pref.subject_id)
                self._by_subject[key] = self._by_subject.get(key, 0.0) + weighted
            else:
                self._general[pref.professor_id] = self._general.get(pref.professor_id, 0.0) + weighted

    def score(self, professor_id: str, section_class: SectionClass) -> float:
        class_key = (professor_id, section_class.class_id)
        if class_key in self._by_class:
            return self._by_class[class_key]
        return self.score_subject(professor_id, section_class.subject_id)

    def score_subject(self, professor_id: str, subject_id: str) -> float:
        subject_key = (professor_id, subject_id)
        if subject_key in self._by_subject:
            return self._by_subject[subject_key]
        return self._general.get(professor_id, 0.0)
