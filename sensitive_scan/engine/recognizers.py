# sensitive_scan/engine/recognizers.py

"""Presidio recognizer that applies one declarative detection rule."""

import logging
from typing import List, Optional

from presidio_analyzer import AnalysisExplanation, EntityRecognizer, RecognizerResult
from presidio_analyzer.nlp_engine import NlpArtifacts

from sensitive_scan.core.domain import DetectionRule

logger = logging.getLogger(__name__)

# Rules are deterministic; every accepted candidate is a full-confidence hit.
RULE_SCORE = 1.0


class RuleRecognizer(EntityRecognizer):
    """Runs every pattern of a DetectionRule over a text.

    Candidates go through the pattern's context window first and its
    validator second. No NLP artifacts are needed.
    """

    def __init__(self, rule: DetectionRule):
        self.rule = rule
        context = [
            keyword
            for pattern in rule.patterns
            if pattern.context
            for keyword in pattern.context.keywords
        ]
        super().__init__(
            supported_entities=[rule.type],
            name=f"{rule.type}_Recognizer",
            supported_language="en",
            context=context,
        )

    def load(self):
        pass

    def analyze(
        self,
        text: str,
        entities: Optional[List[str]] = None,
        nlp_artifacts: Optional[NlpArtifacts] = None,
    ) -> List[RecognizerResult]:
        results = []
        if entities and self.rule.type not in entities:
            return results

        for pattern in self.rule.patterns:
            for match in pattern.regex.finditer(text):
                start, end = match.span()
                value = match.group(0)

                if pattern.context and not pattern.context.is_satisfied(
                    text, start, end
                ):
                    logger.debug(
                        "Candidate rejected: context keyword missing",
                        extra={"type": self.rule.type, "index": start},
                    )
                    continue

                if pattern.validator and not pattern.validator(value, text, start):
                    logger.debug(
                        "Candidate rejected by validator",
                        extra={"type": self.rule.type, "index": start},
                    )
                    continue

                results.append(
                    RecognizerResult(
                        entity_type=self.rule.type,
                        start=start,
                        end=end,
                        score=RULE_SCORE,
                        analysis_explanation=AnalysisExplanation(
                            recognizer=self.name,
                            original_score=RULE_SCORE,
                            pattern_name=pattern.name,
                            pattern=pattern.regex.pattern,
                        ),
                    )
                )

        # Offset order across alternatives; stable keeps pattern order on ties
        results.sort(key=lambda r: r.start)
        return results
