"""
Prompt templates for provider tiers.

Wording is a content concern; what matters structurally is which generation
parameters reach the model and that the exercise prompt asks for the exact
JSON shape the exercise validator enforces.
"""

from __future__ import annotations

from typing import Dict

from langchain_core.prompts import PromptTemplate

try:
    from ..config import config
    from ..models.content import GenerationParameters
except ImportError:
    from src.config import config
    from src.models.content import GenerationParameters


EXPLANATION_SYSTEM_PROMPT = """You are an expert, enthusiastic tutor. Your goal is to explain concepts clearly, adapted to each student, and to spark genuine interest in learning.

Your style:
- Use language appropriate for the student's age
- Build examples around the student's interests whenever possible
- Structure explanations logically and progressively
- Include analogies and practical examples
- Be motivating and positive"""

EXERCISE_SYSTEM_PROMPT = (
    "You generate educational exercises. "
    "You answer ONLY with valid JSON, without any additional text."
)

explanation_prompt = PromptTemplate(
    input_variables=[
        "topic",
        "subject",
        "age",
        "level",
        "depth_directive",
        "tone_directive",
        "preference_directives",
        "interests_block",
        "related_block",
    ],
    template="""Explain the concept of "{topic}" ({subject}) to a {age} student at the {level} level.

**Depth:** {depth_directive}
**Tone:** {tone_directive}

**Learning preferences:**
{preference_directives}
{interests_block}{related_block}
**Structure (separate every part with a blank line):**
1. HOOK (1-2 sentences): connect the topic with something the student cares about
2. MAIN CONCEPT: explain it clearly and directly
3. WORKED EXAMPLE: make the concept tangible using the student's interests
4. MEMORABLE SUMMARY: one sentence capturing the essence

**Format:**
- The first paragraph is the hook; every following paragraph starts with a short title line ending in a colon
- At most 5 short paragraphs
- Use 2-3 relevant emojis
- No meta-comments such as "sure, happy to help" - go straight to the content
""",
)

exercise_prompt = PromptTemplate(
    input_variables=["topic", "subject", "age", "level", "difficulty", "band", "interests_block"],
    template="""Generate ONE practice exercise about "{topic}" ({subject}) for a {age} student at the {level} level, with difficulty {difficulty}/10.
{interests_block}
IMPORTANT: Answer ONLY with a valid JSON object, with no text before or after it.

The JSON must have exactly this structure:
{{
  "question": "Text of the exercise question",
  "options": ["Option A", "Option B", "Option C", "Option D"],
  "correct_answer": "B",
  "explanation": "Clear explanation of why that answer is correct"
}}

REQUIREMENTS:
- The question must be clear and age-appropriate
- All 4 options must be plausible, with exactly one correct
- correct_answer must be "A", "B", "C" or "D"
- The explanation must help understand the concept, not just say "it is correct"
- Difficulty {difficulty}/10: {band}

Answer ONLY with the JSON, without ```json fences or extra text.""",
)


_PREFERENCE_DIRECTIVES = {
    "easyReading": "Use short sentences and everyday vocabulary",
    "examples": "Include concrete, worked examples",
    "analogies": "Use analogies with familiar things",
    "stepByStep": "Break the reasoning into explicit steps",
    "visualAids": "Describe diagrams or visual images that help 'see' the concept",
    "realWorldContext": "Connect the concept with real-world situations",
}

_DEPTH_DIRECTIVES = {
    "simple": "keep it simple: plain definitions, main ideas and how it works",
    "standard": "definition, main properties and relations with other concepts",
    "detailed": "formal definition, fundamental properties, conditions and restrictions",
}


def difficulty_band(difficulty: int) -> str:
    """Qualitative band for a 1-10 difficulty."""
    if difficulty <= 3:
        return "basic, conceptual"
    if difficulty <= 6:
        return "intermediate, application"
    return "advanced, analysis"


def _age_phrase(params: GenerationParameters) -> str:
    return f"{params.age}-year-old" if params.age else "secondary-school age"


def _subject_name(params: GenerationParameters) -> str:
    return config.tutor.subject_names.get(params.subject, params.subject)


def _interests_block(params: GenerationParameters, required: bool) -> str:
    if not params.interests:
        return ""
    interests = ", ".join(params.interests)
    if required:
        return (
            f"\n**Student interests:** {interests}\n"
            "You MUST build the examples and analogies around these interests.\n"
        )
    return (
        f"\nCONTEXT: this student is passionate about {interests}. "
        "If possible, set the exercise in that context to make it more motivating.\n"
    )


def explanation_variables(params: GenerationParameters) -> Dict[str, str]:
    """Prompt variables for an explanation request."""
    enabled = params.preferences.enabled()
    directives = "\n".join(f"- {_PREFERENCE_DIRECTIVES[key]}" for key in enabled)

    tone = "simplified and friendly" if params.simplified else "clear and precise"
    if params.encouraging:
        tone += ", encouraging (the student has struggled recently)"

    related = ""
    if params.related_topics:
        related = (
            "\n**Already studied:** "
            + ", ".join(params.related_topics)
            + " - connect to these where it helps.\n"
        )

    return {
        "topic": params.topic,
        "subject": _subject_name(params),
        "age": _age_phrase(params),
        "level": params.level,
        "depth_directive": _DEPTH_DIRECTIVES.get(params.depth, _DEPTH_DIRECTIVES["standard"]),
        "tone_directive": tone,
        "preference_directives": directives or "- No particular preferences",
        "interests_block": _interests_block(params, required=True),
        "related_block": related,
    }


def exercise_variables(params: GenerationParameters, difficulty: int) -> Dict[str, str]:
    """Prompt variables for one exercise request."""
    return {
        "topic": params.topic,
        "subject": _subject_name(params),
        "age": _age_phrase(params),
        "level": params.level,
        "difficulty": str(difficulty),
        "band": difficulty_band(difficulty),
        "interests_block": _interests_block(params, required=False),
    }
