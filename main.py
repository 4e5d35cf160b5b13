import sys
from pathlib import Path

# Add the src directory to the Python path
# This lets the CLI run from a source checkout without installing the package
src_path = str(Path(__file__).parent / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from auditdiff.__main__ import main  # noqa: E402

if __name__ == "__main__":
    main()
