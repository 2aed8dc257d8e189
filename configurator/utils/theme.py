"""
Terminal theme for the wizard prompts.
"""

from questionary import Style

PRIMARY = "#f9cdde"
SECONDARY = "#b5e0e7"
ERROR = "#f55151"
TEXT = "#9fa6d4"
SUBTEXT = "#6272a4"

# rich markup styles for text printed around the prompts
DESCRIPTION_STYLE = SUBTEXT
NOTICE_STYLE = SECONDARY
SPINNER_STYLE = PRIMARY


def custom_style() -> Style:
    """Build the questionary style used by every prompt."""
    return Style([
        ("qmark", f"fg:{PRIMARY} bold"),
        ("question", f"fg:{PRIMARY} bold"),
        ("answer", f"fg:{SECONDARY} bold"),
        ("pointer", f"fg:{SECONDARY} bold"),
        ("highlighted", f"fg:{PRIMARY} bold"),
        ("selected", f"fg:{PRIMARY}"),
        ("separator", f"fg:{SUBTEXT}"),
        ("instruction", f"fg:{SUBTEXT}"),
        ("text", f"fg:{TEXT}"),
        ("disabled", f"fg:{SUBTEXT} italic"),
        ("validation-toolbar", f"fg:{ERROR} bold"),
    ])
