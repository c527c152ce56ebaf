"""Allow running prsync with python -m prsync."""

from prsync.cli import main


main()
