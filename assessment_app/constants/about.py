"""Static metadata describing the assessment app."""

APP_NAME = "Microinteraction Assessment"
APP_VERSION = "0.1.0"
APP_ABOUT_TEXT = (
    "Timed, scored multiple-choice assessment for the microinteraction and "
    "automation training course. Results are stored per user."
)
