"""Built-in microinteraction assessment used when no question file is configured."""

from __future__ import annotations

from assessment_app.core.models import Question, QuestionOption


def _options(*texts: str) -> tuple[QuestionOption, ...]:
    return tuple(
        QuestionOption(option_id=chr(ord("a") + idx), text=text)
        for idx, text in enumerate(texts)
    )


DEFAULT_QUESTIONS: tuple[Question, ...] = (
    Question(
        id=1,
        prompt=(
            'A "Save" button gives no visual feedback when clicked. The user cannot '
            "tell whether the action succeeded. What is the problem?"
        ),
        options=_options(
            "Missing trigger",
            "Missing feedback",
            "Poorly defined rules",
            "Loops & modes problem",
        ),
        correct_option_id="b",
        explanation=(
            "Feedback tells users that their action was recognized and processed. "
            "Without it they are left guessing."
        ),
    ),
    Question(
        id=2,
        prompt=(
            "A form can be submitted with required fields left empty and only shows "
            "an error after the page reloads. What is wrong?"
        ),
        options=_options(
            "Missing inline validation",
            "Colors are too dark",
            "Button is too small",
            "Unreadable font",
        ),
        correct_option_id="a",
        explanation=(
            "Inline validation is a key microinteraction: it prevents errors before "
            "submission and improves the experience."
        ),
    ),
    Question(
        id=3,
        prompt=(
            "A toggle switch changes state instantly, without any animation or "
            "transition. Which microinteraction principle is violated?"
        ),
        options=_options(
            "The trigger is wrong",
            "The rules are confusing",
            "Insufficient visual feedback",
            "The wrong mode is active",
        ),
        correct_option_id="c",
        explanation=(
            "Smooth transitions help users see that their action was recognized. "
            "The animation communicates the change of state."
        ),
    ),
    Question(
        id=4,
        prompt=(
            "An RPA automation was set up to run 24/7, but there are no logs or error "
            "notifications. Which good practice is missing?"
        ),
        options=_options(
            "Execution speed",
            "Monitoring and logging",
            "A prettier interface",
            "More robots",
        ),
        correct_option_id="b",
        explanation=(
            "Monitoring and logging are essential to spot failures and keep an "
            "automation reliable."
        ),
    ),
    Question(
        id=5,
        prompt=(
            "A loading page shows no progress at all, only a blank screen. What would "
            "improve the experience?"
        ),
        options=_options(
            "Remove the loading step",
            "Skeleton loading or a spinner",
            "An alert pop-up",
            "A waiting sound",
        ),
        correct_option_id="b",
        explanation=(
            "Skeleton screens and spinners show that something is happening and "
            "shorten the perceived wait."
        ),
    ),
)
