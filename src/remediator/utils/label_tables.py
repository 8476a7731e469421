# src/remediator/utils/label_tables.py
from typing import Tuple

# Ordered (token, label) pairs. Matching is substring-based and the first
# token found wins, so the order below is part of the contract.
LabelTable = Tuple[Tuple[str, str], ...]

SOCIAL_LABELS: LabelTable = (
    ("facebook", "Facebook"),
    ("twitter", "Twitter"),
    ("x.com", "X"),
    ("linkedin", "LinkedIn"),
    ("instagram", "Instagram"),
    ("youtube", "YouTube"),
    ("tiktok", "TikTok"),
    ("pinterest", "Pinterest"),
    ("github", "GitHub"),
)

BUTTON_LABELS: LabelTable = (
    ("close", "Close"),
    ("dismiss", "Dismiss"),
    ("menu", "Menu"),
    ("hamburger", "Menu"),
    ("toggle", "Toggle"),
    ("search", "Search"),
    ("submit", "Submit"),
    ("prev", "Previous"),
    ("previous", "Previous"),
    ("next", "Next"),
    ("play", "Play"),
    ("pause", "Pause"),
    ("expand", "Expand"),
    ("collapse", "Collapse"),
    ("nav", "Navigation"),
)

INPUT_LABELS: LabelTable = (
    ("text", "Text input"),
    ("email", "Email address"),
    ("tel", "Phone number"),
    ("password", "Password"),
    ("search", "Search"),
    ("url", "Website URL"),
    ("number", "Number"),
    ("date", "Date"),
    ("time", "Time"),
    ("checkbox", "Checkbox"),
    ("radio", "Radio option"),
    ("file", "File upload"),
)

# Input types that never need a generated label.
SKIPPED_INPUT_TYPES = frozenset({"hidden", "submit", "button", "image", "reset"})

DEFAULT_LINK_LABEL = "Link"
DEFAULT_BUTTON_LABEL = "Button"
DEFAULT_INPUT_LABEL = "Input field"
