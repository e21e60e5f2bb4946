#!/usr/bin/env python3
"""
Local spoken-interview harness (no HTTP).

Usage:
  python3 scripts/run_interview.py --questions-file questions.txt
  python3 scripts/run_interview.py "What is a hash map?" "Explain TCP slow start."
  python3 scripts/run_interview.py --capture microphone --score questions.txt

What it does:
- Asks each question through the speech output (or prints it with --mock-speech)
- Captures the answer from the console (default) or the microphone
- Prints every question with the captured response when the interview completes
- With --score, runs the captured responses through the scoring use case
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

load_dotenv()

from voice_interview.application.exceptions import CapabilityUnavailableError
from voice_interview.application.utils.question_text import parse_question_lines
from voice_interview.core.config import settings
from voice_interview.core.logging import configure_logging
from voice_interview.domain.entities.session_state import SessionState
from voice_interview.wiring.dependencies import (
    build_interview_session,
    get_recognition_backend,
    get_score_use_case,
    get_speech_output,
)


def _load_questions(args: argparse.Namespace) -> list[str]:
    text = ""
    if args.questions_file:
        text = Path(args.questions_file).read_text(encoding="utf-8")
    if args.questions:
        text = "\n".join([text, *args.questions])
    return parse_question_lines(text)


def _print_summary(state: SessionState) -> None:
    print("\nInterview Completed")
    print("-" * 60)
    for i, question in enumerate(state.questions):
        response = state.responses[i] if i < len(state.responses) else ""
        print(f"Q{i + 1}: {question}")
        print(f"    Your Answer: {response}")
    print("-" * 60)


async def _run(args: argparse.Namespace, questions: list[str]) -> SessionState | None:
    loop = asyncio.get_running_loop()
    done: asyncio.Future[SessionState] = loop.create_future()

    last_live = {"text": ""}

    def on_update(state: SessionState) -> None:
        if state.live_transcript and state.live_transcript != last_live["text"]:
            print(f"  (live) {state.live_transcript}")
        last_live["text"] = state.live_transcript

    def on_complete(state: SessionState) -> None:
        if not done.done():
            done.set_result(state)

    speech = get_speech_output(mock=args.mock_speech)
    session = build_interview_session(
        questions=questions,
        loop=loop,
        speech=speech,
        backend=get_recognition_backend(loop, mode=args.capture),
        on_update=on_update,
        on_complete=on_complete,
    )

    try:
        session.start()
        state = await done
    except CapabilityUnavailableError as e:
        print(f"ERROR: {e}")
        print("Try --mock-speech and/or --capture console.")
        return None
    finally:
        speech.close()

    _print_summary(state)

    if args.score:
        result = await get_score_use_case().execute(list(state.questions), list(state.responses))
        print("\n--- Scores ---")
        for item in result.results:
            print(f"{item.analysis.score:g}/10  {item.question}")
            print(f"    Feedback: {item.analysis.feedback}")
            print(f"    Ideal Answer: {item.analysis.correct_answer}")
        print(f"Total questions: {result.summary.total_questions}")
        print(f"Average score: {result.summary.average_score:.2f}")
    return state


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a spoken interview locally.")
    parser.add_argument("questions", nargs="*", help="Question texts")
    parser.add_argument("--questions-file", help="File with one question per line")
    parser.add_argument("--capture", choices=("console", "microphone"), default="console")
    parser.add_argument("--mock-speech", action="store_true", help="Print questions instead of speaking them")
    parser.add_argument("--score", action="store_true", help="Score the captured responses afterwards")
    args = parser.parse_args()

    configure_logging(settings.LOG_LEVEL)

    questions = _load_questions(args)
    if not questions:
        print("No valid questions provided.")
        sys.exit(1)

    try:
        state = asyncio.run(_run(args, questions))
    except KeyboardInterrupt:
        print("\nBye!")
        return
    if state is None:
        sys.exit(1)


if __name__ == "__main__":
    main()
