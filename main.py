#!/usr/bin/env python3
"""Run git-pr-release from a source checkout.

Example:
    python main.py --dry-run
"""

from git_pr_release.cli import main

if __name__ == "__main__":
    main()
