import os

# headless charts for the experiment tests
os.environ.setdefault("MPLBACKEND", "Agg")
