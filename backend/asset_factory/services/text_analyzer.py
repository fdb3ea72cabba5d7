"""
Text Analyzer - Classifies raw copy into headline, subhead, body, CTA and tag
roles, then reconciles the batch so there is a single primary headline.
"""
import re
from typing import List, Sequence, Tuple
import structlog

from asset_factory.models import ClassifiedText, Role, TextInput
from asset_factory.utils import count_words

logger = structlog.get_logger()


# ============================================================================
# CONFIGURATION
# ============================================================================

ACTION_WORDS = (
    "learn", "get", "join", "start", "try", "discover", "explore",
    "sign up", "subscribe", "download", "buy", "shop", "order",
    "contact", "call", "book", "register", "apply", "claim",
    "read", "watch", "listen", "view", "see", "check",
    "click", "tap", "swipe", "scroll",
)

ARROW_PATTERN = re.compile("[→➜➡►▶]")

TAG_PATTERNS = (
    re.compile(r"^(new|hot|sale|trending|featured|exclusive|limited)$", re.IGNORECASE),
    re.compile(r"^(update|news|blog|post|article)$", re.IGNORECASE),
    re.compile(r"^(tip|guide|how-?to|tutorial)$", re.IGNORECASE),
    re.compile(r"^#\w+$"),
    re.compile(r"^\d{1,2}/\d{1,2}$"),
)

TAG_MAX_WORDS = 3
TAG_MAX_UPPERCASE_CHARS = 15
CTA_MAX_WORDS = 5
HEADLINE_MAX_WORDS = 10
SUBHEAD_MAX_WORDS = 30
PROMOTION_MAX_WORDS = 15

ROLE_CONFIDENCE = {
    Role.TAG: 0.9,
    Role.CTA: 0.85,
    Role.HEADLINE: 0.8,
    Role.SUBHEAD: 0.75,
    Role.BODY: 0.7,
}
EXPLICIT_CONFIDENCE = 1.0
DEMOTION_FACTOR = 0.8
PROMOTION_FACTOR = 0.7

ROLE_ORDER = (Role.TAG, Role.HEADLINE, Role.SUBHEAD, Role.BODY, Role.CTA)


# ============================================================================
# FEATURES
# ============================================================================

def has_action_cue(text: str) -> bool:
    """True if the text contains an action word/phrase or an arrow glyph."""
    lower = text.lower()
    if any(word in lower for word in ACTION_WORDS):
        return True
    return bool(ARROW_PATTERN.search(text))


def ends_with_terminal_punctuation(text: str) -> bool:
    return text.strip().endswith((".", "!", "?"))


def is_tag(text: str) -> bool:
    """
    Short labels: status words, hashtags and d/d dates of at most three
    words, or short all-caps strings.
    """
    trimmed = text.strip()
    if count_words(trimmed) <= TAG_MAX_WORDS:
        if any(pattern.match(trimmed) for pattern in TAG_PATTERNS):
            return True
    return len(trimmed) <= TAG_MAX_UPPERCASE_CHARS and trimmed == trimmed.upper()


class TextAnalyzer:
    """
    Text role classifier.
    """

    def analyze(self, inputs: Sequence[TextInput]) -> List[ClassifiedText]:
        """
        Classify a batch of text inputs.

        Explicit roles are kept with full confidence. Inferred roles are
        reconciled so that the batch has one headline where possible, and
        the result is ordered tag, headline, subhead, body, cta.

        Args:
            inputs: Text inputs, optionally with explicit roles

        Returns:
            Classified texts (same length as inputs, possibly reordered)
        """
        items: List[Tuple[ClassifiedText, bool]] = []
        for text_input in inputs:
            if text_input.role is not None:
                items.append((self._classify_explicit(text_input.text, text_input.role), True))
            else:
                items.append((self.classify(text_input.text), False))

        results = self._ensure_hierarchy(items)

        logger.debug(
            "text_analyzed",
            count=len(results),
            roles=[r.role.value for r in results]
        )
        return results

    def classify(self, text: str) -> ClassifiedText:
        """Infer the role of a single text fragment."""
        word_count = count_words(text)
        action = has_action_cue(text)
        punctuated = ends_with_terminal_punctuation(text)

        if is_tag(text):
            role = Role.TAG
        elif action and word_count <= CTA_MAX_WORDS:
            role = Role.CTA
        elif word_count <= HEADLINE_MAX_WORDS and not punctuated:
            role = Role.HEADLINE
        elif word_count <= SUBHEAD_MAX_WORDS:
            role = Role.SUBHEAD
        else:
            role = Role.BODY

        return ClassifiedText(
            text=text,
            role=role,
            word_count=word_count,
            char_count=len(text),
            has_action_cue=action,
            ends_with_terminal_punctuation=punctuated,
            confidence=ROLE_CONFIDENCE[role]
        )

    def _classify_explicit(self, text: str, role: Role) -> ClassifiedText:
        return ClassifiedText(
            text=text,
            role=role,
            word_count=count_words(text),
            char_count=len(text),
            has_action_cue=has_action_cue(text),
            ends_with_terminal_punctuation=ends_with_terminal_punctuation(text),
            confidence=EXPLICIT_CONFIDENCE
        )

    def _ensure_hierarchy(self, items: List[Tuple[ClassifiedText, bool]]) -> List[ClassifiedText]:
        headlines = [(item, explicit) for item, explicit in items if item.role == Role.HEADLINE]

        if len(headlines) > 1:
            # An explicit headline outranks an inferred one
            keeper = next(
                (item for item, explicit in headlines if explicit),
                headlines[0][0]
            )
            for item, explicit in headlines:
                if item is keeper or explicit:
                    continue
                item.role = Role.SUBHEAD
                item.confidence *= DEMOTION_FACTOR
            logger.debug("headlines_demoted", count=len(headlines) - 1)

        elif not headlines and items:
            candidate = next(
                (
                    item for item, explicit in items
                    if not explicit
                    and item.word_count <= PROMOTION_MAX_WORDS
                    and item.role not in (Role.CTA, Role.TAG)
                ),
                None
            )
            if candidate is not None:
                candidate.role = Role.HEADLINE
                candidate.confidence *= PROMOTION_FACTOR
                logger.debug("headline_promoted", text=candidate.text[:40])

        # sorted() is stable, so equal roles keep input order
        return sorted((item for item, _ in items), key=lambda r: ROLE_ORDER.index(r.role))


# Singleton instance
text_analyzer = TextAnalyzer()
