"""Allow ``python -m mural_publisher.cli`` execution."""

from mural_publisher.cli.murals import main

main()
