import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parent.parent
SRC = ROOT / "src"

# `core` and `plecoise` live under src/; make them importable for plain pytest runs.
sys.path[:0] = [str(SRC), str(ROOT)]
