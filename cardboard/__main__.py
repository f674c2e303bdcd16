"""Allow `python -m cardboard`."""

from .cli.main import main

main()
