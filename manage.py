#!/usr/bin/env python
"""Django's command-line utility for the school dashboard."""
import os
import sys
from pathlib import Path
from dotenv import load_dotenv


def main():
    load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
    from django.core.management import execute_from_command_line
    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
