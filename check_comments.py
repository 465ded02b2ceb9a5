import sys, pathlib

ROOT = pathlib.Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT / "src"))

from comment_checks.analysis import main

if __name__ == "__main__":
    sys.exit(main())
