"""
Validated console input.

Every prompt loops until its validator accepts the answer, so callers never see
invalid data. The input function is injectable for tests.
"""

import soupsieve

from .config import DECLINE_ANSWERS
from .strategies import EXTRACTION_STRATEGIES

_INVALID = object()


class Prompter:
    """
    Line-based question/answer helper.

    Args:
        input_func: callable taking a prompt string and returning the answer
            (default: builtin input)
    """

    INVALID = _INVALID

    def __init__(self, input_func=None):
        self.input_func = input_func or input

    def ask(self, question, validator, error_message="Invalid input. Please try again."):
        """
        Ask until validator(answer) returns something other than INVALID.

        The validator receives the stripped answer and returns the value to
        hand back, or Prompter.INVALID to re-ask.
        """
        while True:
            answer = self.input_func(question).strip()
            result = validator(answer)
            if result is not _INVALID:
                return result
            print(error_message)

    def ask_value(self, name):
        """Ask for a free-text value. "null"/"undefined" decline (None); empty is rejected."""
        def validate(answer):
            if answer.lower() in DECLINE_ANSWERS:
                return None
            if not answer:
                return _INVALID
            return answer

        return self.ask(
            f"Please enter a value for {name}, or else null:\n    ",
            validate,
            "\nInput cannot be empty. Please try again.",
        )

    def ask_selector(self, name):
        """Ask for a CSS selector, rejecting anything that doesn't compile."""
        def validate(answer):
            if answer.lower() in DECLINE_ANSWERS:
                return None
            if not answer or not is_valid_css_selector(answer):
                return _INVALID
            return answer

        return self.ask(
            f"Please enter a CSS selector for {name}, or else null:\n    ",
            validate,
            "\nNot a valid CSS selector. Please try again.",
        )

    def ask_choice(self, name, choices):
        """Ask for one of a fixed set of names (or null)."""
        choices = list(choices)

        def validate(answer):
            if answer.lower() in DECLINE_ANSWERS:
                return None
            if answer in choices:
                return answer
            return _INVALID

        return self.ask(
            f"Please enter {name} ({', '.join(choices)}), or else null:\n    ",
            validate,
            f"\nPlease choose one of: {', '.join(choices)}",
        )

    def ask_strategy(self, name):
        """Ask for a registered extraction strategy name (or null)."""
        return self.ask_choice(name, EXTRACTION_STRATEGIES)

    def ask_yes_no(self, question):
        """Ask a y/n question. Returns a bool."""
        def validate(answer):
            if answer.lower() in ("y", "yes"):
                return True
            if answer.lower() in ("n", "no"):
                return False
            return _INVALID

        return self.ask(f"{question} (y/n) ", validate, "Invalid input. Please enter 'y' or 'n'.")

    def ask_canonical_key(self, raw_key, value, vocabulary):
        """
        Ask which canonical field a raw key maps to.

        Returns the canonical name, or None when the operator answers null
        (the key carries nothing we store).
        """
        vocabulary = set(vocabulary)

        def validate(answer):
            if answer.lower() in DECLINE_ANSWERS:
                return None
            if answer in vocabulary:
                return answer
            return _INVALID

        return self.ask(
            f'\nNo mapping for key "{raw_key}" (value: "{value}").\n'
            f"Enter the standardized key, or else null:\n    ",
            validate,
            "\nNot a known standardized key. Please try again.",
        )

    def confirm_continue(self):
        return self.ask_yes_no("Continue?")


def is_valid_css_selector(selector):
    """True if the selector parses as CSS."""
    try:
        soupsieve.compile(selector)
    except (soupsieve.SelectorSyntaxError, ValueError):
        return False
    return True
