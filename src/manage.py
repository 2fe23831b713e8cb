#!/usr/bin/env python
"""Django's command-line utility for administrative tasks."""

import os
import sys


def main() -> None:
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
    from django.conf import settings
    from django.core.management import execute_from_command_line

    argv = sys.argv
    if len(argv) == 2 and argv[1] == "runserver":
        argv = [*argv, f"0.0.0.0:{settings.PORT}"]
    execute_from_command_line(argv)


if __name__ == "__main__":
    main()
