"""Allow ``python -m birdwalk.cli`` execution."""

from birdwalk.cli.lookup import main

main()
