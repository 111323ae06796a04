"""
Guards around the remote flashcard generation service.

Requests are built only from a validated deck title, and whatever the
service returns is treated as untrusted input: it is parsed, normalized and
pushed back through the same field validators as hand-written cards.
"""
import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Pattern as RePattern, Tuple

from .security import ContentValidator, RateLimiter, sanitize_for_display

logger = logging.getLogger(__name__)

GENERATE_ACTION = "generate_flashcard"
FALLBACK_QUESTION = "What is the main topic of this deck?"
DEFAULT_DIFFICULTY = 2
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5

LEADING_INT_PATTERN: RePattern[str] = re.compile(r'\s*([+-]?\d+)')

SYSTEM_PROMPT = (
    "You are an educational content creator that generates high-quality flashcards. "
    "Create a single flashcard with a clear, concise question and a comprehensive answer. "
    "The content should be educational and appropriate for the given deck topic. "
    'Return your response as JSON with "question", "answer", and "difficulty" (1-5) fields.'
)


class GenerationError(Exception):
    """Generated content could not be turned into a flashcard"""
    pass


@dataclass
class GeneratedCard:
    """A flashcard produced by the generation service"""
    question: str
    answer: str
    difficulty: int = DEFAULT_DIFFICULTY

    def to_dict(self) -> Dict[str, Any]:
        return {"question": self.question, "answer": self.answer, "difficulty": self.difficulty}


def build_generation_prompt(deck_title: str) -> List[Dict[str, str]]:
    """Chat messages asking for one flashcard on the deck's topic"""
    user_prompt = (
        f'Create a flashcard for a deck titled "{deck_title}". '
        "Make sure the question is clear and the answer is informative but concise. "
        "The difficulty should be appropriate for the topic (1=very easy, 5=very hard)."
    )
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt},
    ]


def _parse_leading_int(value: Any) -> Optional[int]:
    """Integer part of a number, or the leading digits of a string like '4 stars'"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        # JSON allows Infinity, NaN and overflowing literals such as 1e400
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str) and (match := LEADING_INT_PATTERN.match(value)):
        return int(match.group(1))
    return None


def _clamp_difficulty(value: Any) -> int:
    difficulty = _parse_leading_int(value)
    # 0 counts as missing
    if not difficulty:
        return DEFAULT_DIFFICULTY
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, difficulty))


def parse_generated_card(content: str) -> GeneratedCard:
    """
    Turn the service's raw message content into a GeneratedCard.

    Content that is not JSON becomes the answer to a generic question.

    Raises:
        GenerationError: If the question or answer is missing
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, TypeError):
        logger.info("Generated content is not JSON, using fallback question")
        data = {"question": FALLBACK_QUESTION, "answer": content, "difficulty": DEFAULT_DIFFICULTY}

    if not isinstance(data, dict):
        raise GenerationError("Generated flashcard must be a JSON object")

    question, answer = data.get("question"), data.get("answer")
    if not question or not answer:
        raise GenerationError("Generated flashcard missing required fields")
    if not isinstance(question, str) or not isinstance(answer, str):
        raise GenerationError("Generated flashcard fields must be text")

    return GeneratedCard(
        question=question,
        answer=answer,
        difficulty=_clamp_difficulty(data.get("difficulty"))
    )


class GenerationGuard:
    """Validates and rate limits flashcard generation requests and their results"""

    def __init__(
        self,
        validator: ContentValidator,
        rate_limiter: RateLimiter,
        max_attempts: int = 5,
        window_seconds: float = 60.0
    ):
        self.validator = validator
        self.rate_limiter = rate_limiter
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds

    def prepare(
        self,
        deck_title: Optional[str],
        user_id: Optional[str] = None
    ) -> Tuple[Optional[List[Dict[str, str]]], Optional[str]]:
        """
        Build the prompt for a generation request.

        Returns (messages, error_message); exactly one of them is None.
        """
        title = self.validator.validate_title(deck_title, user_id)
        if not title.is_valid:
            return None, title.error

        if not self.rate_limiter.can_attempt(GENERATE_ACTION, self.max_attempts,
                                             self.window_seconds, user_id=user_id):
            wait = self.rate_limiter.get_remaining_time(GENERATE_ACTION, self.window_seconds, user_id=user_id)
            return None, f"Too many generation requests. Please wait {math.ceil(wait)} seconds"

        return build_generation_prompt(sanitize_for_display(title.sanitized)), None

    def review(
        self,
        content: str,
        user_id: Optional[str] = None
    ) -> Tuple[Optional[GeneratedCard], Optional[str]]:
        """
        Re-validate generated content before it is shown or stored.

        Returns (card, error_message); the card carries sanitized text.
        """
        try:
            card = parse_generated_card(content)
        except GenerationError as e:
            logger.warning(f"Discarding generated flashcard: {e}")
            return None, str(e)

        # Stop at the first failing side so one bad card records one failure
        if not (question := self.validator.validate_question(card.question, user_id)).is_valid:
            return None, question.error
        if not (answer := self.validator.validate_answer(card.answer, user_id)).is_valid:
            return None, answer.error

        return GeneratedCard(
            question=question.sanitized,
            answer=answer.sanitized,
            difficulty=card.difficulty
        ), None
