#!/usr/bin/env python3
"""Smoke check for the scoring API against a running server."""

import os
import sys

import httpx


BASE_URL = os.getenv("SCORE_API_URL", "http://127.0.0.1:8001")


def check_score() -> bool:
    """POST a small batch to /api/v1/score and print the analysis."""
    print("=" * 60)
    print("POST /api/v1/score")
    print("=" * 60)

    payload = {
        "questions": [
            "What is the difference between a list and a tuple in Python?",
            "Explain how FastAPI handles async requests.",
            "Describe a time you debugged a production incident.",
        ],
        "answers": [
            "A list is mutable and uses square brackets, while a tuple is immutable and uses parentheses.",
            "FastAPI runs async route handlers on the event loop and sync ones in a threadpool.",
            "",
        ],
    }

    try:
        response = httpx.post(f"{BASE_URL}/api/v1/score", json=payload, timeout=60.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        print(f"HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False
    except httpx.HTTPError as e:
        print(f"Error: {e}")
        return False

    data = response.json()
    print(f"Scored {len(data['results'])} of {data['summary']['totalQuestions']} questions:\n")
    for r in data["results"]:
        print(f"  Q: {r['question']}")
        print(f"    Score: {r['analysis']['score']}/10")
        print(f"    Feedback: {r['analysis']['feedback']}")
        print(f"    Ideal Answer: {r['analysis']['correctAnswer']}")
    print(f"\nAverage score: {data['summary']['averageScore']}")
    return True


def check_validation() -> bool:
    """Mismatched lengths must be rejected with 400 and a message."""
    response = httpx.post(
        f"{BASE_URL}/api/v1/score",
        json={"questions": ["a", "b"], "answers": ["x"]},
        timeout=10.0,
    )
    ok = response.status_code == 400 and "message" in response.json()
    print(f"\nValidation check: {'ok' if ok else 'FAILED'} ({response.status_code} {response.text})")
    return ok


def main() -> None:
    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0).raise_for_status()
        print("Server is running\n")
    except httpx.HTTPError:
        print("Server is not running!")
        print("   Please start it with: uvicorn voice_interview.main:app --reload --port 8001")
        sys.exit(1)

    results = [check_score(), check_validation()]

    print("\n" + "=" * 60)
    print("Checks complete!" if all(results) else "Some checks failed.")
    print("=" * 60 + "\n")
    if not all(results):
        sys.exit(1)


if __name__ == "__main__":
    main()
