"""
Workout routine generation service.

Asks a text model for a multi-day routine and normalizes its answer into a
RoutineRecord with a title, a description and a markdown outline.
"""
import logging
from typing import Optional

from backend.clients.protocol import LanguageModel
from backend.engine.parsing.models import RoutineRecord
from backend.engine.parsing.routine import RoutineParser
from backend.errors import RoutineGenerationError, UpstreamContentInvalidError
from backend.models.schemas import RoutinePromptStyle, RoutineRequest

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are an expert personal trainer who designs safe, effective workout routines.
Only use the equipment the user has available. Match each session to the requested duration.

Markdown rules for the outline:
- Start each training day with a level-2 header, e.g. "## Day 1: Lower Body"
- Use level-3 headers for blocks within a day, e.g. "### Warm-up", "### Main Workout", "### Cool-down"
- List exercises as bullet points with sets, reps and rest, e.g. "- Goblet Squat: 3 x 10, rest 60s"
- Keep notes short; do not use tables or code blocks"""


MARKDOWN_FORMAT_INSTRUCTIONS = """Format your answer as a markdown document:
# <routine title>
DESCRIPTION: <two or three sentences describing the routine and who it suits>
OUTLINE:
<the day-by-day outline>"""


STRUCTURED_FORMAT_INSTRUCTIONS = """Format your answer using exactly these cues, each at the start of its own line and in this order:
TITLE: <routine title on one line>
DESCRIPTION: <two or three sentences describing the routine and who it suits>
OUTLINE:
<the day-by-day outline>
Do not write anything before TITLE: or after the outline."""


def build_user_prompt(
    request: RoutineRequest,
    style: RoutinePromptStyle = RoutinePromptStyle.STRUCTURED,
) -> str:
    """Build the user prompt for a routine request."""
    equipment = ", ".join(request.selected_equipment)
    if style == RoutinePromptStyle.MARKDOWN:
        format_instructions = MARKDOWN_FORMAT_INSTRUCTIONS
    else:
        format_instructions = STRUCTURED_FORMAT_INSTRUCTIONS

    return f"""Create a {request.number_of_days}-day workout routine.

Fitness goal: {request.fitness_goal}
Session duration: {request.duration_minutes} minutes
Available equipment: {equipment}

Include exactly {request.number_of_days} training days.

{format_instructions}"""


class RoutineGenerationService:
    """
    Service for generating workout routines with a language model.

    The prompt style only changes what the model is asked for; the parser
    accepts either layout.
    """

    def __init__(
        self,
        model: LanguageModel,
        style: RoutinePromptStyle = RoutinePromptStyle.STRUCTURED,
        parser: Optional[RoutineParser] = None,
    ):
        """
        Initialize the routine generation service.

        Args:
            model: Language model used to write the routine.
            style: Layout the model is asked to follow.
            parser: Parser for the model's answer.
        """
        self.model = model
        self.style = style
        self.parser = parser or RoutineParser()

    def generate_routine(self, request: RoutineRequest) -> RoutineRecord:
        """
        Generate a workout routine.

        Args:
            request: Validated routine parameters.

        Returns:
            RoutineRecord with non-empty title, description and outline.

        Raises:
            RoutineGenerationError: If the model call fails or its answer
                does not contain all three sections.
        """
        user_prompt = build_user_prompt(request, self.style)

        try:
            content = self.model.complete(SYSTEM_PROMPT, user_prompt)
            return self.parser.parse(content)
        except UpstreamContentInvalidError as e:
            logger.error(f"Model response did not follow the routine format: {e.message}")
            raise RoutineGenerationError(
                e.message,
                details={"cause": e.error_code.value, **e.details},
            ) from e
        except Exception as e:
            logger.exception("Error generating workout routine")
            raise RoutineGenerationError(
                str(e),
                details={"error_type": type(e).__name__},
            ) from e
