"""
SpeechRelay Streamlit UI — main entry point.

Run with: ``streamlit run src/ui/app.py``
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from src.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (src/ui/),
# which removes the project root needed for absolute ``src.*`` imports.
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

from src.core.config import get_settings  # noqa: E402
from src.core.exceptions import ConfigurationError  # noqa: E402
from src.core.models import Platform  # noqa: E402
from src.core.utils import setup_logging  # noqa: E402
from src.services.capture import resolve_relay_url  # noqa: E402
from src.ui.components.recorder import render_recorder  # noqa: E402

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Speech-to-Text App",
    page_icon="\U0001f399️",
    layout="centered",
)

settings = get_settings()
setup_logging(settings.log_level)

# A missing relay address in production is a deployment error, not a
# failed transcription: stop before rendering any capture controls.
try:
    relay_url = resolve_relay_url(settings, Platform.default, settings.capture_is_device)
except ConfigurationError as exc:
    st.error(exc.detail)
    st.stop()

# ---------------------------------------------------------------------------
# Session state defaults
# ---------------------------------------------------------------------------
_DEFAULTS = {
    "primary_language": settings.default_language_code,
    "alt_languages_csv": ",".join(settings.default_alternative_language_codes),
    "transcript": "",
    "last_clip_id": None,
}

for key, value in _DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = value

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
with st.sidebar:
    st.caption("Relay")
    st.code(relay_url, language=None)

st.title("Speech-to-Text App")
render_recorder(settings, relay_url)
