import os
from pathlib import Path

# Resolve config.yaml regardless of the directory pytest is started from
os.environ.setdefault("APP_CONFIG_FILE", str(Path(__file__).resolve().parents[1] / "config.yaml"))

from tests.fixtures import *  # noqa: E402,F401,F403
