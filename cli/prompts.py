"""Line-based prompts and table output."""

import math
import sys
from typing import List, Optional, Sequence, TextIO

import pandas as pd

from festplan.errors import EndOfInput, ValidationError


def euros(cents: float) -> str:
    return f"{cents / 100:.2f} €"


class Prompter:
    """Reads typed answers from one stream and writes to another."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    # =========================================================================
    # Output
    # =========================================================================

    def write(self, text: str = ""):
        self.stdout.write(text + "\n")
        self.stdout.flush()

    def table(self, df: pd.DataFrame):
        """Print a DataFrame without its index."""
        if df.empty:
            self.write("(nothing to show)")
            return
        self.write(df.to_string(index=False, float_format="{:.2f}".format))

    def numbered(self, options: Sequence[str]):
        for i, option in enumerate(options):
            self.write(f"{i}\t{option}")

    # =========================================================================
    # Input
    # =========================================================================

    def ask(self, prompt: str) -> str:
        """Read one stripped line. Raises EndOfInput when the stream is closed."""
        self.stdout.write(prompt)
        self.stdout.flush()

        line = self.stdin.readline()
        if not line:
            raise EndOfInput()
        return line.strip()

    def get_int(self, prompt: str) -> int:
        raw = self.ask(prompt)
        try:
            return int(raw)
        except ValueError:
            raise ValidationError(f"{raw!r} is not a whole number", details={"input": raw})

    def get_float(self, prompt: str) -> float:
        raw = self.ask(prompt)
        try:
            value = float(raw.replace(",", "."))
        except ValueError:
            raise ValidationError(f"{raw!r} is not a number", details={"input": raw})
        if not math.isfinite(value):
            raise ValidationError(f"{raw!r} is not a number", details={"input": raw})
        return value

    def choose(self, options: Sequence[str], prompt: str) -> str:
        """Pick one option by its number."""
        if not options:
            raise ValidationError("there is nothing to choose from")
        index = self.get_int(prompt)
        if not 0 <= index < len(options):
            raise ValidationError(
                f"{index} is not a valid number, pick 0 to {len(options) - 1}",
                details={"input": index},
            )
        return options[index]

    def split_choice(self, prompt: str) -> List[str]:
        """Comma separated answer, empty entries dropped."""
        raw = self.ask(prompt)
        return [part.strip() for part in raw.split(",") if part.strip()]
