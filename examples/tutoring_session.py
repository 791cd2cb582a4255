"""
Tutoring session example: Profile → Explanation → Exercises → Answer check

Demonstrates the full request flow through TutorService:
1. Describe a learner and their recent sessions
2. Request a personalized explanation
3. Request an adaptive exercise batch
4. Check an answer

Runs without API keys (local fallback content); set GROQ_API_KEY or
TOGETHER_API_KEY to get model-generated content.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import config, configure_logging, token_tracker
from src.tutor import TutorService


def main():
    configure_logging()

    for problem in config.validate():
        print(f"⚠ {problem}")

    service = TutorService()

    profile = {
        "age": 15,
        "priorKnowledge": ["limits"],
        "difficulties": ["integrals"],
        "interests": ["football"],
        "preferences": {"easyReading": True},
    }
    recent_sessions = [
        {"topic": "limits", "score": {"percentage": 85}, "timestamp": "2024-05-01T10:00:00Z"},
        {"topic": "basic derivatives", "score": {"percentage": 50}, "timestamp": "2024-05-03T10:00:00Z"},
    ]

    # ==================== Step 1: Explanation ====================
    print("=" * 60)
    print("STEP 1: Personalized explanation")
    print("=" * 60)

    result = service.explain(
        "math", "secondary", "derivatives",
        profile_data=profile, recent_sessions=recent_sessions,
    )
    explanation = result["data"]
    print(f"Source: {explanation['metadata']['source']}")
    print(f"\n{explanation['summary']}\n")
    for step in explanation["steps"]:
        print(f"{step['title']}")
        print(f"  {step['content']}")
        if step.get("formula"):
            print(f"  Formula: {step['formula']}")
    print()

    # ==================== Step 2: Exercises ====================
    print("=" * 60)
    print("STEP 2: Adaptive exercises")
    print("=" * 60)

    result = service.exercises(
        "math", "secondary", "integrals", count=3,
        profile_data=profile, recent_sessions=recent_sessions,
    )
    for exercise in result["data"]:
        print(f"[{exercise['id']}] ({exercise['difficulty']}/10) {exercise['question']}")
        for letter, option in zip(config.exercises.option_ids, exercise["options"]):
            print(f"    {letter}) {option}")
    print()

    # ==================== Step 3: Answer check ====================
    print("=" * 60)
    print("STEP 3: Answer check")
    print("=" * 60)

    first = result["data"][0]
    check = service.check(first["id"], "a", first["correct_answer"])
    print(check["data"]["feedback"])
    print()

    print(token_tracker.summary())


if __name__ == "__main__":
    main()
