"""Allow ``python -m slow_internet_detector``."""

from slow_internet_detector.cli import main

main()
