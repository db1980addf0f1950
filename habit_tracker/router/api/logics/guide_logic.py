"""Checks for the customisation tasks of the learner guide.

Each auto-checked task reads ``style.css`` or ``index.html`` from the public
folder and looks for the change the task asks for. Self-check tasks always
pass; the learner confirms those in the browser.
"""
import re
from pathlib import Path
from typing import Callable, Dict, List, Optional

from habit_tracker.log import get_logger
from habit_tracker.schema.guide_schema import GuideCheckOut, GuideTaskOut

log = get_logger(__name__)

STYLE_FILE = "style.css"
HTML_FILE = "index.html"

DEFAULT_BG_PAGE = "#f8f9ff"
DEFAULT_COLOUR_DONE = "#4ecb71"
DEFAULT_CARD_RADIUS = 20

GUIDE_TASKS: List[GuideTaskOut] = [
    GuideTaskOut(number=1, title="Change the page background colour", kind="CSS", file="public/style.css", auto_check=True),
    GuideTaskOut(number=2, title="Make the cards more rounded", kind="CSS", file="public/style.css", auto_check=True),
    GuideTaskOut(number=3, title="Change the page font", kind="CSS", file="public/style.css + public/index.html", auto_check=False),
    GuideTaskOut(number=4, title="Add a page title above the habit grid", kind="HTML", file="public/index.html", auto_check=True),
    GuideTaskOut(number=5, title="Add a footer to the page", kind="HTML", file="public/index.html", auto_check=True),
    GuideTaskOut(number=6, title="Change the check-in button colour", kind="CSS", file="public/style.css", auto_check=True),
    GuideTaskOut(number=7, title="Make the empty state message funnier", kind="JavaScript", file="public/app.js", auto_check=False),
    GuideTaskOut(number=8, title="Add a second emoji to the streak display", kind="JavaScript", file="public/app.js", auto_check=False),
]

SELF_CHECK_MESSAGES = {
    3: "This is a self-check task. If you can see a different font in the browser, you did it!",
    7: "This is a self-check task. If you see your new message when there are no habits, you did it!",
    8: "This is a self-check task. If you can see a second emoji next to the streak number, you nailed it!",
}


def read_file(path: Path) -> Optional[str]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        log.warning("could not read %s: %s", path, e)
        return None
    return content or None


def css_variable(css: str, name: str) -> Optional[str]:
    match = re.search(rf"--{re.escape(name)}\s*:\s*([^;]+)", css)
    return match.group(1).strip() if match else None


def _leading_int(value: str) -> Optional[int]:
    match = re.match(r"\s*(-?\d+)", value)
    return int(match.group(1)) if match else None


class GuideChecker:
    def __init__(self, public_dir: Path):
        self.public_dir = Path(public_dir)
        self._checks: Dict[int, Callable[[], GuideCheckOut]] = {
            1: self.check_background_colour,
            2: self.check_card_radius,
            4: self.check_page_title,
            5: self.check_footer,
            6: self.check_done_colour,
        }

    def check(self, task_number: int) -> GuideCheckOut:
        if task_number in SELF_CHECK_MESSAGES:
            return GuideCheckOut(passed=True, message=SELF_CHECK_MESSAGES[task_number])
        check = self._checks.get(task_number)
        if check is None:
            return GuideCheckOut(passed=False, message=f"Unknown task number: {task_number}")
        return check()

    def _read(self, file_name: str) -> Optional[str]:
        return read_file(self.public_dir / file_name)

    def _changed_colour(self, variable: str, default: str, success: str) -> GuideCheckOut:
        css = self._read(STYLE_FILE)
        if css is None:
            return GuideCheckOut(passed=False, message=f"Could not read public/{STYLE_FILE}")
        value = css_variable(css, variable)
        if value is None:
            return GuideCheckOut(passed=False, message=f"Could not find --{variable} variable in {STYLE_FILE}")
        value = value.lower()
        if value == default:
            return GuideCheckOut(
                passed=False,
                message=f"The --{variable} value is still the default ({default}). Change it to a different colour!",
            )
        return GuideCheckOut(passed=True, message=success.format(value=value))

    def check_background_colour(self) -> GuideCheckOut:
        return self._changed_colour("bg-page", DEFAULT_BG_PAGE, "Nice! You changed the background colour to {value}!")

    def check_done_colour(self) -> GuideCheckOut:
        return self._changed_colour("colour-done", DEFAULT_COLOUR_DONE, "Check-in button is now {value}. Looks great!")

    def check_card_radius(self) -> GuideCheckOut:
        css = self._read(STYLE_FILE)
        if css is None:
            return GuideCheckOut(passed=False, message=f"Could not read public/{STYLE_FILE}")
        value = css_variable(css, "card-radius")
        if value is None:
            return GuideCheckOut(passed=False, message=f"Could not find --card-radius variable in {STYLE_FILE}")
        radius = _leading_int(value)
        if radius is None or radius <= DEFAULT_CARD_RADIUS:
            return GuideCheckOut(
                passed=False,
                message=f"The --card-radius is {value}. Make it larger than {DEFAULT_CARD_RADIUS}px (try 32px or 40px)!",
            )
        return GuideCheckOut(passed=True, message=f"Great! Cards are now {value} rounded, looking smooth!")

    def check_page_title(self) -> GuideCheckOut:
        html = self._read(HTML_FILE)
        if html is None:
            return GuideCheckOut(passed=False, message=f"Could not read public/{HTML_FILE}")
        if not re.search(r"<h2[^>]*>.*My Daily Habits.*</h2>", html, re.IGNORECASE):
            return GuideCheckOut(
                passed=False,
                message='Could not find an <h2> element containing "My Daily Habits" in index.html.',
            )
        return GuideCheckOut(passed=True, message="Awesome! The page title is showing up. Looking professional!")

    def check_footer(self) -> GuideCheckOut:
        html = self._read(HTML_FILE)
        if html is None:
            return GuideCheckOut(passed=False, message=f"Could not read public/{HTML_FILE}")
        if not re.search(r"<footer[\s>]", html, re.IGNORECASE):
            return GuideCheckOut(
                passed=False,
                message="Could not find a <footer> element in index.html. Add one inside the .app container!",
            )
        return GuideCheckOut(passed=True, message="Footer found! Your page now has a proper ending.")
