from __future__ import annotations

import sys

from interview_kata.cli import main

raise SystemExit(main(sys.argv[1:]))
