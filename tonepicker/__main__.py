"""Run the Tone Picker backend with ``python -m tonepicker``."""

from tonepicker.main import run

run()
