"""Shared utility functions for SpeechRelay."""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once for the relay server or the UI.

    Safe to call repeatedly (Streamlit re-runs the script on every
    interaction); handlers are only installed on the first call.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if root.handlers:
        return
    logging.basicConfig(
        level=root.level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
